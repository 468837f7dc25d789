"""
remindr - Personal Reminder Tracker

Create, update, complete and query reminders kept in a local JSON file.
"""

__version__ = "1.0.0"
