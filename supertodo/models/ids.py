"""Identifier generation for table primary keys."""

from __future__ import annotations

from uuid import uuid4


def new_id() -> str:
    """Return a new opaque row identifier."""
    return str(uuid4())
