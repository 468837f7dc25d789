"""
remindr Reminder Store - Persistent JSON Storage

Holds every reminder in memory and mirrors it to a single JSON file.

Design:
- Whole collection loaded once at construction
- Whole file rewritten after every successful mutation
- Graceful recovery from an unreadable file (start empty, keep a backup)
- Single writer, no locking
"""

import json
import logging
import random
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

from .reminder_models import Reminder, ReminderResult

logger = logging.getLogger(__name__)


class ReminderStoreError(Exception):
    """Raised when the reminder file cannot be written"""
    pass


class ReminderStore:
    """
    File-backed reminder collection.

    File layout: JSON array of [id, reminder] pairs, in insertion order.

    Operations addressed by id never raise for a missing reminder; they
    return a NOT_FOUND ReminderResult instead. A failed write raises
    ReminderStoreError and leaves the in-memory state untouched.
    """

    DEFAULT_STORAGE_FILE = "reminders.json"
    ID_MIN = 10_000_000
    ID_MAX = 99_999_999

    def __init__(self, storage_path: Optional[Path] = None, rng: Optional[random.Random] = None):
        """
        Initialize reminder store.

        Args:
            storage_path: Storage file path (default: ./reminders.json)
            rng: Random source for id generation (default: fresh random.Random)
        """
        self.storage_path = Path(storage_path) if storage_path else Path(self.DEFAULT_STORAGE_FILE)
        self._rng = rng or random.Random()
        self._reminders: Dict[str, Reminder] = self._load_reminders()

        logger.info(f"ReminderStore initialized: {self.storage_path} ({len(self._reminders)} reminders)")

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _load_reminders(self) -> Dict[str, Reminder]:
        """
        Load all reminders from storage.

        Never raises: a missing or unreadable file yields an empty collection.

        Returns:
            Mapping of id to Reminder, in file order
        """
        if not self.storage_path.exists():
            logger.info(f"No reminder file at {self.storage_path}, starting empty")
            return {}

        try:
            with open(self.storage_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"Error loading reminders: corrupted JSON in {self.storage_path}: {e}")
            self._backup_corrupted()
            return {}
        except OSError as e:
            logger.error(f"Error loading reminders: cannot read {self.storage_path}: {e}", exc_info=True)
            return {}

        if not isinstance(data, list):
            logger.error(
                f"Error loading reminders: expected a list of [id, reminder] pairs, "
                f"got {type(data).__name__}"
            )
            self._backup_corrupted()
            return {}

        reminders: Dict[str, Reminder] = {}
        for entry in data:
            if not isinstance(entry, list) or len(entry) != 2:
                logger.warning(f"Skipping invalid entry: {entry!r}")
                continue

            key, record = entry
            try:
                reminder = Reminder.from_dict(record)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping invalid reminder {key!r}: {e}")
                continue

            if key != reminder.id:
                logger.warning(f"Skipping reminder {reminder.id}: stored under mismatched key {key!r}")
                continue

            if key in reminders:
                logger.warning(f"Duplicate reminder id {key}, keeping the last one")
            reminders[key] = reminder

        logger.debug(f"Loaded {len(reminders)} reminders")
        return reminders

    def _save_reminders(self, reminders: Dict[str, Reminder]):
        """
        Write the full collection to storage.

        Args:
            reminders: Collection to persist

        Raises:
            ReminderStoreError: If storage cannot be written
        """
        data = [[reminder_id, reminder.to_dict()] for reminder_id, reminder in reminders.items()]
        temp_path = self.storage_path.with_name(self.storage_path.name + '.tmp')

        try:
            self.storage_path.parent.mkdir(parents=True, exist_ok=True)

            # Write to temp, then rename over the real file
            with open(temp_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(self.storage_path)

            logger.debug(f"Saved {len(reminders)} reminders")

        except OSError as e:
            logger.error(f"Failed to save reminders: {e}", exc_info=True)
            self._discard_temp(temp_path)
            raise ReminderStoreError(f"Cannot save reminders to {self.storage_path}: {e}") from e

    def _discard_temp(self, temp_path: Path):
        """Remove a leftover temp file from a failed save."""
        try:
            temp_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove temp file {temp_path}: {e}")

    def _commit(self, reminders: Dict[str, Reminder]):
        """Persist `reminders`, then adopt it as the live collection."""
        self._save_reminders(reminders)
        self._reminders = reminders

    def _backup_corrupted(self):
        """
        Move an unreadable file aside so the next save does not overwrite it.
        """
        backup_path = self.storage_path.with_name(self.storage_path.name + '.bak')
        try:
            self.storage_path.replace(backup_path)
            logger.warning(f"Backed up corrupted storage to: {backup_path}")
        except OSError as e:
            logger.error(f"Failed to back up corrupted storage: {e}")

    def _generate_unique_id(self) -> str:
        """Draw 8-digit ids until one is not currently held."""
        while True:
            candidate = str(self._rng.randint(self.ID_MIN, self.ID_MAX))
            if candidate not in self._reminders:
                return candidate
            logger.debug(f"Id collision on {candidate}, drawing again")

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, message: str, time: str) -> str:
        """
        Create a new reminder.

        Args:
            message: Free text, may be empty
            time: Due time, stored verbatim (expected YYYY-MM-DD HH:mm)

        Returns:
            The new reminder's id

        Raises:
            ReminderStoreError: If storage fails
        """
        reminder_id = self._generate_unique_id()
        reminders = dict(self._reminders)
        reminders[reminder_id] = Reminder(id=reminder_id, message=message, time=time)
        self._commit(reminders)

        logger.info(f"Created reminder: {reminder_id}")
        return reminder_id

    def mark_completed(self, reminder_id: str) -> ReminderResult:
        """Mark a reminder as completed. Marking twice is not an error."""
        return self._set_completed(reminder_id, True, "marked as completed")

    def unmark_completed(self, reminder_id: str) -> ReminderResult:
        """Mark a reminder as not completed."""
        return self._set_completed(reminder_id, False, "unmarked as completed")

    def _set_completed(self, reminder_id: str, completed: bool, verb: str) -> ReminderResult:
        current = self._reminders.get(reminder_id)
        if current is None:
            logger.warning(f"Cannot set completed={completed}: reminder {reminder_id} not found")
            return ReminderResult.not_found(reminder_id)

        reminder = replace(current, completed=completed)
        reminders = dict(self._reminders)
        reminders[reminder_id] = reminder
        self._commit(reminders)

        logger.info(f"Reminder {reminder_id} {verb}")
        return ReminderResult.success(reminder, f"Reminder {reminder_id} {verb}.")

    def update(
        self,
        reminder_id: str,
        message: Optional[str] = None,
        time: Optional[str] = None
    ) -> ReminderResult:
        """
        Update message and/or time of an existing reminder.

        None or an empty string leaves that field unchanged.

        Args:
            reminder_id: Reminder to update
            message: New message
            time: New time

        Returns:
            OK result with the updated reminder, or NOT_FOUND

        Raises:
            ReminderStoreError: If storage fails
        """
        current = self._reminders.get(reminder_id)
        if current is None:
            logger.warning(f"Reminder {reminder_id} not found for update")
            return ReminderResult.not_found(reminder_id)

        reminder = replace(
            current,
            message=message if message else current.message,
            time=time if time else current.time
        )
        reminders = dict(self._reminders)
        reminders[reminder_id] = reminder
        self._commit(reminders)

        logger.info(f"Updated reminder: {reminder_id}")
        return ReminderResult.success(reminder, f"Reminder {reminder_id} updated.")

    def remove(self, reminder_id: str) -> ReminderResult:
        """
        Delete a reminder permanently.

        Returns:
            OK result carrying the removed reminder, or NOT_FOUND

        Raises:
            ReminderStoreError: If storage fails
        """
        if reminder_id not in self._reminders:
            logger.warning(f"Reminder {reminder_id} not found for deletion")
            return ReminderResult.not_found(reminder_id)

        reminders = dict(self._reminders)
        removed = reminders.pop(reminder_id)
        self._commit(reminders)

        logger.info(f"Deleted reminder: {reminder_id}")
        return ReminderResult.success(removed, f"Reminder {reminder_id} deleted.")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def exists(self, reminder_id: str) -> bool:
        return reminder_id in self._reminders

    def get(self, reminder_id: str) -> ReminderResult:
        """
        Get a specific reminder by ID.

        Returns:
            OK result with the reminder, or NOT_FOUND
        """
        reminder = self._reminders.get(reminder_id)
        if reminder is None:
            return ReminderResult.not_found(reminder_id)
        return ReminderResult.success(reminder, f"Reminder {reminder_id} found.")

    def list_all(self) -> List[Reminder]:
        return list(self._reminders.values())

    def list_completed(self) -> List[Reminder]:
        return [r for r in self._reminders.values() if r.completed]

    def list_pending(self) -> List[Reminder]:
        return [r for r in self._reminders.values() if not r.completed]

    def list_due_by_today(self, today: Optional[date] = None) -> List[Reminder]:
        """
        Get reminders due on or before today.

        Only the date portion of each reminder's time is compared. A time
        that cannot be parsed is treated as not due.

        Args:
            today: Reference date (default: date.today())
                   Injected for testability

        Returns:
            Due reminders, completed or not, in insertion order
        """
        if today is None:
            today = date.today()

        due = [r for r in self._reminders.values() if r.is_due(today)]

        logger.debug(f"Found {len(due)} reminders due by {today.isoformat()}")
        return due

    def get_stats(self, today: Optional[date] = None) -> dict:
        """
        Get storage statistics.

        Returns:
            Dict with total, completed, pending and due counts
        """
        completed = len(self.list_completed())
        return {
            'total': len(self._reminders),
            'completed': completed,
            'pending': len(self._reminders) - completed,
            'due': len(self.list_due_by_today(today))
        }
