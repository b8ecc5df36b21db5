# ruff: noqa: INP001
"""Pytest configuration shared across supertodo tests."""

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Settings validate at import time; pin auth and stats defaults so the
# suite does not depend on the developer's shell or `.env`.
os.environ["AUTH_MODE"] = "local"
os.environ["LOCAL_AUTH_TOKEN"] = "test-local-token-0123456789-0123456789-0123456789x"
os.environ["STATS_TIMEZONE"] = ""
