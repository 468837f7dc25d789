"""
remindr Memory - Reminder models and file-backed store
"""

from .reminder_models import Reminder, ReminderResult, ResultStatus
from .reminder_store import ReminderStore, ReminderStoreError

__all__ = [
    'Reminder',
    'ReminderResult',
    'ResultStatus',
    'ReminderStore',
    'ReminderStoreError',
]
