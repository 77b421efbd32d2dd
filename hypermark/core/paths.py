#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants and configuration for the Hypermark project.

All paths are Path objects resolved at import time, relative to the
project root (the directory containing the hypermark package):

    ROOT/
    ├── hypermark/     # Library code
    ├── tests/         # Test suite
    └── logs/          # Validation run logs (created on demand)

CLI options take their defaults from these constants.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path


def _get_project_root() -> Path:
    """
    Determine project root directory.

    Assumes this file is at ROOT/hypermark/core/paths.py and navigates up
    the directory tree to find ROOT.

    Returns:
        Path object for project root
    """
    # paths.py -> core/ -> hypermark/ -> ROOT/
    return Path(__file__).resolve().parent.parent.parent


# ----- Project directory -----
ROOT: Path = _get_project_root()

# ---- Logs ----
LOG_DIR = ROOT / "logs"
