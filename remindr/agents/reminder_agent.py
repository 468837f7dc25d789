"""
remindr Reminder Agent - Menu-Facing Service

Responsibilities:
- Forward each menu action to exactly one ReminderStore operation
- Turn store results into text the menu can print
- NO storage logic of its own
"""

import logging
from datetime import date
from typing import List, Optional

from remindr.memory.reminder_models import Reminder
from remindr.memory.reminder_store import ReminderStore

logger = logging.getLogger(__name__)


class ReminderAgent:
    """
    Thin service over ReminderStore.

    Mutations return the message to show the user. Queries return
    Reminder lists; use format_reminders() to render them.
    """

    def __init__(self, store: ReminderStore):
        """
        Initialize reminder agent.

        Args:
            store: ReminderStore instance for persistence
        """
        self.store = store
        logger.info("ReminderAgent initialized")

    def create_reminder(self, message: str, time: str) -> str:
        """
        Create a new reminder.

        Args:
            message: Reminder text
            time: Due time as typed (YYYY-MM-DD HH:mm)

        Returns:
            Confirmation text containing the new id

        Raises:
            ReminderStoreError: If storage fails
        """
        reminder_id = self.store.create(message, time)
        return f"Reminder created with ID: {reminder_id}"

    def get_reminder(self, reminder_id: str) -> str:
        """
        Look up one reminder.

        Returns:
            Formatted reminder, or "Reminder not found."
        """
        result = self.store.get(reminder_id.strip())
        if not result.found:
            return "Reminder not found."
        return self.format_reminder_for_user(result.reminder)

    def update_reminder(
        self,
        reminder_id: str,
        message: Optional[str] = None,
        time: Optional[str] = None
    ) -> str:
        """Blank message or time keeps the current value."""
        return self.store.update(reminder_id.strip(), message or None, time or None).message

    def delete_reminder(self, reminder_id: str) -> str:
        return self.store.remove(reminder_id.strip()).message

    def mark_completed(self, reminder_id: str) -> str:
        return self.store.mark_completed(reminder_id.strip()).message

    def unmark_completed(self, reminder_id: str) -> str:
        return self.store.unmark_completed(reminder_id.strip()).message

    def list_all(self) -> List[Reminder]:
        return self.store.list_all()

    def list_completed(self) -> List[Reminder]:
        return self.store.list_completed()

    def list_pending(self) -> List[Reminder]:
        return self.store.list_pending()

    def list_due(self, today: Optional[date] = None) -> List[Reminder]:
        reminders = self.store.list_due_by_today(today)
        logger.debug(f"Listed {len(reminders)} due reminders")
        return reminders

    def format_stats(self) -> str:
        """One-line summary of counts, shown under the full listing."""
        stats = self.store.get_stats()
        return (
            f"Total: {stats['total']}  Completed: {stats['completed']}  "
            f"Pending: {stats['pending']}  Due: {stats['due']}"
        )

    def format_reminder_for_user(self, reminder: Reminder) -> str:
        """
        Format one reminder as a single display line.

        Example: "[x] 12345678  2024-01-01 10:00  buy milk"
        """
        mark = "x" if reminder.completed else " "
        message = reminder.message if reminder.message else "(no message)"
        time = reminder.time if reminder.time else "(no time)"
        return f"[{mark}] {reminder.id}  {time}  {message}"

    def format_reminders(self, reminders: List[Reminder], empty: str = "No reminders.") -> str:
        """
        Format a list of reminders, one per line.

        Args:
            reminders: Reminders to render
            empty: Text returned when the list is empty

        Returns:
            Display block
        """
        if not reminders:
            return empty

        lines = [f"{len(reminders)} reminder(s):"]
        lines.extend(f"  {self.format_reminder_for_user(r)}" for r in reminders)
        return "\n".join(lines)
