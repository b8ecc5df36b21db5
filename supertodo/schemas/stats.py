"""Schemas for per-owner todo statistics."""

from __future__ import annotations

from sqlmodel import SQLModel


class PriorityBreakdown(SQLModel):
    """Todo counts per priority value."""

    low: int = 0
    medium: int = 0
    high: int = 0
    urgent: int = 0


class TodoStats(SQLModel):
    """Summary figures over an owner's full, unfiltered todo set."""

    total: int
    completed: int
    pending: int
    overdue: int
    due_today: int
    completion_rate: int
    by_priority: PriorityBreakdown
