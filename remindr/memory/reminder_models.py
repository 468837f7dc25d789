"""
remindr Reminder Models

Data structures for the reminder tracker.

- Reminder: one user-entered reminder, stored verbatim
- ReminderResult: outcome of a lookup or mutation (ok vs not found)
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional

from dateutil import parser as date_parser


# Differ in year, month and day; day 1 and 2 exist in every month
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


class ResultStatus(Enum):
    """Outcome of a store operation addressed by id"""
    OK = "ok"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Reminder:
    """
    A single reminder.

    `time` is kept exactly as the user typed it (expected form
    YYYY-MM-DD HH:mm). It is only interpreted when asking whether the
    reminder is due.

    Frozen; the store replaces the instance on every change.
    """
    id: str
    message: str
    time: str
    completed: bool = False

    def due_date(self) -> Optional[date]:
        """
        Calendar date of `time`, or None if it cannot be parsed.

        The string must carry a full year-month-day. dateutil fills missing
        parts from its default, so parsing against two different defaults
        and comparing catches "10:00" or "June".

        Returns:
            date portion of the parsed time
        """
        if not self.time or not self.time.strip():
            return None
        try:
            first = date_parser.parse(self.time, default=_DEFAULT_A).date()
            second = date_parser.parse(self.time, default=_DEFAULT_B).date()
        except (ValueError, OverflowError):
            return None
        return first if first == second else None

    def is_due(self, today: date) -> bool:
        """True if the reminder falls on or before `today`. Unparsable times are never due."""
        due = self.due_date()
        return due is not None and due <= today

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict"""
        return {
            'id': self.id,
            'message': self.message,
            'time': self.time,
            'completed': self.completed
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Reminder':
        """
        Create Reminder from dict.

        Raises:
            KeyError: If a field is missing
            TypeError: If a field has the wrong type
            ValueError: If id is not exactly 8 digits
        """
        for key in ('id', 'message', 'time'):
            if not isinstance(data[key], str):
                raise TypeError(f"{key} must be a string")
        if not isinstance(data['completed'], bool):
            raise TypeError("completed must be a boolean")
        if len(data['id']) != 8 or not (data['id'].isascii() and data['id'].isdigit()):
            raise ValueError(f"id must be 8 digits, got {data['id']!r}")

        return cls(
            id=data['id'],
            message=data['message'],
            time=data['time'],
            completed=data['completed']
        )


@dataclass(frozen=True)
class ReminderResult:
    """
    Result of an operation on a single reminder.

    `reminder` carries the current state on success, so a found reminder
    with an empty message is never confused with a missing one.
    """
    status: ResultStatus
    reminder_id: str
    message: str
    reminder: Optional[Reminder] = None

    @property
    def ok(self) -> bool:
        return self.status == ResultStatus.OK

    @property
    def found(self) -> bool:
        return self.status != ResultStatus.NOT_FOUND

    @classmethod
    def success(cls, reminder: Reminder, message: str) -> 'ReminderResult':
        return cls(ResultStatus.OK, reminder.id, message, reminder)

    @classmethod
    def not_found(cls, reminder_id: str) -> 'ReminderResult':
        return cls(ResultStatus.NOT_FOUND, reminder_id, f"Reminder {reminder_id} not found.")
