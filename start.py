"""
remindr Start - Interactive Menu Entry Point

Reads one menu choice per loop, calls exactly one ReminderAgent operation,
prints the result. Exits on choice 11, EOF or Ctrl+C.
"""

import logging
from pathlib import Path
from typing import Optional

from remindr.agents import ReminderAgent
from remindr.memory import ReminderStore, ReminderStoreError

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

EXIT_CHOICE = "11"

MENU = """
Choose an option:
1. Create Reminder
2. Retrieve Reminder
3. Update Reminder
4. Delete Reminder
5. Show All Reminders
6. Mark Reminder as Completed
7. Unmark Reminder as Completed
8. Show Completed Reminders
9. Show Pending Reminders
10. Show Due Reminders
11. Exit"""


def handle_choice(choice: str, agent: ReminderAgent) -> bool:
    """
    Run one menu selection.

    Args:
        choice: Raw menu input
        agent: Service to dispatch to

    Returns:
        False when the user chose to exit, True otherwise
    """
    choice = choice.strip()

    if choice == "1":
        message = input("Enter reminder message: ")
        time = input("Enter reminder time (YYYY-MM-DD HH:mm): ")
        print(agent.create_reminder(message, time))

    elif choice == "2":
        print(agent.get_reminder(input("Enter reminder ID: ")))

    elif choice == "3":
        reminder_id = input("Enter reminder ID: ")
        message = input("Enter new message (leave blank to keep the same): ")
        time = input("Enter new time (YYYY-MM-DD HH:mm) (leave blank to keep the same): ")
        print(agent.update_reminder(reminder_id, message, time))

    elif choice == "4":
        print(agent.delete_reminder(input("Enter reminder ID: ")))

    elif choice == "5":
        print(agent.format_reminders(agent.list_all()))
        print(agent.format_stats())

    elif choice == "6":
        print(agent.mark_completed(input("Enter reminder ID: ")))

    elif choice == "7":
        print(agent.unmark_completed(input("Enter reminder ID: ")))

    elif choice == "8":
        print(agent.format_reminders(agent.list_completed(), empty="No completed reminders."))

    elif choice == "9":
        print(agent.format_reminders(agent.list_pending(), empty="No pending reminders."))

    elif choice == "10":
        print(agent.format_reminders(agent.list_due(), empty="No reminders due."))

    elif choice == EXIT_CHOICE:
        print("Goodbye!")
        return False

    else:
        print("Invalid choice, please try again.")

    return True


def main(storage_path: Optional[Path] = None) -> int:
    """
    Main remindr entry point.

    Args:
        storage_path: Reminder file (default: ./reminders.json)

    Returns:
        Process exit code
    """
    store = ReminderStore(storage_path=storage_path)
    agent = ReminderAgent(store)

    while True:
        print(MENU)
        try:
            choice = input("Enter your choice: ")
            if not handle_choice(choice, agent):
                break

        except ReminderStoreError as e:
            logger.error(f"Store operation failed: {e}")
            print(f"\nError: {e}\n")
        except (KeyboardInterrupt, EOFError):
            print("\nGoodbye!")
            break

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
