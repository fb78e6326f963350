"""Hydration tracking: daily water goal, intake ledger, history and reminders"""

__version__ = "1.0.0"
