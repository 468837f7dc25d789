"""
remindr Agents - services sitting between the menu and the store
"""

from .reminder_agent import ReminderAgent

__all__ = [
    'ReminderAgent',
]
