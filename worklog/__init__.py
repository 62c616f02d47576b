"""Worklog - personal project/task time tracking"""

__version__ = "1.0.0"
