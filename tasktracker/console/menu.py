"""
Interactive console front end.

Pick (or create) a user, then drive that user's task list from a numbered
menu. All state lives on a ConsoleSession that every handler receives.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from tasktracker.adapters.repo_sql import (
    SQLAlchemyTaskListRepository,
    SQLAlchemyTaskRepository,
    SQLAlchemyUserRepository,
)
from tasktracker.app.config import get_settings
from tasktracker.app.core.errors import RecordNotFoundError
from tasktracker.app.core.ids import parse_row_id
from tasktracker.app.core.logging_config import configure_logging
from tasktracker.app.db import create_db_engine, init_db
from tasktracker.app.domain import Task, User
from tasktracker.ports.repository import ITaskListRepository, ITaskRepository, IUserRepository

logger = logging.getLogger(__name__)

MENU = """
Menu Options:
1. View all tasks
2. Add a new task
3. Mark a task as finished
4. Mark a task as unfinished
5. Remove a task
6. Switch user
7. Exit"""


@dataclass
class ConsoleSession:
    users: IUserRepository
    task_lists: ITaskListRepository
    tasks: ITaskRepository
    ask: Callable[[str], str] = field(default=lambda prompt: input(prompt))
    say: Callable[[str], None] = field(default=lambda text: print(text))
    current_user: Optional[User] = field(default=None)

    @property
    def task_list_id(self) -> Optional[int]:
        if self.current_user is None or self.current_user.task_list is None:
            return None
        return self.current_user.task_list.id


def _require_list(session: ConsoleSession) -> Optional[int]:
    task_list_id = session.task_list_id
    if task_list_id is None:
        session.say("No user logged in or no task list available.")
    return task_list_id


def view_all_tasks(session: ConsoleSession) -> None:
    task_list_id = _require_list(session)
    if task_list_id is None:
        return

    task_list = session.task_lists.find_by_id(task_list_id)
    if task_list is None or not task_list.tasks:
        session.say("No tasks found.")
        return

    session.say("\nYour Tasks:")
    for index, task in enumerate(task_list.tasks, start=1):
        status = "[✓]" if task.finished else "[ ]"
        session.say(f"{index}. {status} {task.description} (ID: {task.id})")


def add_task(session: ConsoleSession) -> None:
    task_list_id = _require_list(session)
    if task_list_id is None:
        return

    description = session.ask("Enter task description: ")
    if not description.strip():
        session.say("Task description cannot be empty.")
        return

    session.tasks.save(Task(description=description), task_list_id)
    session.say(f'Task "{description}" added successfully!')


def _pick_task(session: ConsoleSession, action: str) -> Optional[Task]:
    view_all_tasks(session)
    task_id = parse_row_id(session.ask(f"Enter the ID of the task to {action}: "))
    if task_id is None:
        session.say("Invalid task ID.")
        return None

    task = session.tasks.find_by_id(task_id)
    if task is None:
        session.say("Task not found.")
    return task


def mark_task_finished(session: ConsoleSession) -> None:
    if _require_list(session) is None:
        return
    task = _pick_task(session, "mark as finished")
    if task is None:
        return
    task.finish()
    session.tasks.update(task)
    session.say(f'Task "{task.description}" marked as finished.')


def mark_task_unfinished(session: ConsoleSession) -> None:
    if _require_list(session) is None:
        return
    task = _pick_task(session, "mark as unfinished")
    if task is None:
        return
    task.unfinish()
    session.tasks.update(task)
    session.say(f'Task "{task.description}" marked as unfinished.')


def remove_task(session: ConsoleSession) -> None:
    if _require_list(session) is None:
        return
    task = _pick_task(session, "remove")
    if task is None:
        return
    session.tasks.delete(task.id)
    session.say(f'Task "{task.description}" removed successfully.')


def create_new_user(session: ConsoleSession) -> None:
    while True:
        name = session.ask("Enter your name: ")
        if name.strip():
            break
        session.say("Name cannot be empty.")

    session.current_user = session.users.save(User(name=name))
    session.say(f'User "{name}" created and logged in successfully!')


def select_user(session: ConsoleSession) -> None:
    session.say("\n=== User Selection ===")
    while True:
        users = session.users.find_all()
        if not users:
            session.say("No users found. Creating a new user...")
            create_new_user(session)
            return

        session.say("Available users:")
        for index, user in enumerate(users, start=1):
            session.say(f"{index}. {user.name} (ID: {user.id})")
        session.say(f"{len(users) + 1}. Create new user")

        choice = parse_row_id(session.ask("Select a user (enter number) or create new: "))
        selected = choice - 1 if choice is not None else -1
        if 0 <= selected < len(users):
            session.current_user = users[selected]
            session.say(f"Logged in as {session.current_user.name}")
            return
        if selected == len(users):
            create_new_user(session)
            return
        session.say("Invalid selection.")


ACTIONS: dict[str, Callable[[ConsoleSession], None]] = {
    "1": view_all_tasks,
    "2": add_task,
    "3": mark_task_finished,
    "4": mark_task_unfinished,
    "5": remove_task,
    "6": select_user,
}
EXIT_CHOICE = "7"


def show_menu(session: ConsoleSession) -> bool:
    """Run one menu round; returns False once the user chose to exit."""

    session.say("\n=== TODO App ===")
    session.say(f"Current user: {session.current_user.name if session.current_user else 'None'}")
    session.say(MENU)

    choice = session.ask("Enter your choice (1-7): ").strip()
    if choice == EXIT_CHOICE:
        session.say("Goodbye!")
        return False

    action = ACTIONS.get(choice)
    if action is None:
        session.say("Invalid option. Please try again.")
        return True

    try:
        action(session)
    except (SQLAlchemyError, RecordNotFoundError) as exc:
        logger.debug("Console action %s failed", choice, exc_info=True)
        session.say(f"An error occurred: {exc}")
    return True


def run_console(session: ConsoleSession) -> None:
    session.say("Welcome to the TODO App!")
    try:
        select_user(session)
        while show_menu(session):
            pass
    except (EOFError, KeyboardInterrupt):
        logger.info("Console input closed, exiting.")
        session.say("\nGoodbye!")
    except (SQLAlchemyError, RecordNotFoundError) as exc:
        logger.debug("Console stopped on store failure", exc_info=True)
        session.say(f"An error occurred: {exc}")


def build_session(db: Session) -> ConsoleSession:
    return ConsoleSession(
        users=SQLAlchemyUserRepository(db),
        task_lists=SQLAlchemyTaskListRepository(db),
        tasks=SQLAlchemyTaskRepository(db),
    )


def main(argv: Optional[list[str]] = None) -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Interactive task list console")
    parser.add_argument("--database-url", default=settings.database_url)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    engine = create_db_engine(args.database_url)
    init_db(engine)

    db = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        run_console(build_session(db))
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    main()
