#!/usr/bin/env python

"""
Worklog - Main Entry Point

A personal time tracker: organize work into projects and tasks, run one
timer at a time and see where the time went, grouped by project and task.

Usage:
    python main.py

Requirements:
    - Python 3.10+
    - See pyproject.toml for dependencies
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from worklog.ui import main


if __name__ == "__main__":
    sys.exit(main())
