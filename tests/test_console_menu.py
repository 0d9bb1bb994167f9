from __future__ import annotations

from typing import Iterable

import pytest
from sqlalchemy.exc import OperationalError

from tasktracker.app.domain import Task, User
from tasktracker.console import menu
from tasktracker.console.menu import ConsoleSession


class ScriptedIO:
    """Feeds canned answers to prompts and records everything printed."""

    def __init__(self, answers: Iterable[str]):
        self._answers = list(answers)
        self.prompts: list[str] = []
        self.lines: list[str] = []

    def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._answers:
            raise EOFError
        return self._answers.pop(0)

    def say(self, text: str) -> None:
        self.lines.append(text)

    @property
    def output(self) -> str:
        return "\n".join(self.lines)


@pytest.fixture()
def make_session(users, task_lists, tasks):
    def _make(answers: Iterable[str]) -> tuple[ConsoleSession, ScriptedIO]:
        io = ScriptedIO(answers)
        session = ConsoleSession(
            users=users, task_lists=task_lists, tasks=tasks, ask=io.ask, say=io.say
        )
        return session, io

    return _make


def test_first_run_creates_user(make_session, users) -> None:
    session, io = make_session(["", "Ana", "7"])

    menu.run_console(session)

    assert "No users found. Creating a new user..." in io.output
    assert "Name cannot be empty." in io.output
    assert 'User "Ana" created and logged in successfully!' in io.output
    assert io.lines[-1] == "Goodbye!"
    assert session.current_user.name == "Ana"
    assert [u.name for u in users.find_all()] == ["Ana"]


def test_select_existing_user(make_session, users) -> None:
    users.save(User(name="Ana"))
    users.save(User(name="Bruno"))
    session, io = make_session(["9", "2", "7"])

    menu.run_console(session)

    assert "Invalid selection." in io.output
    assert "Logged in as Bruno" in io.output
    assert session.current_user.name == "Bruno"


def test_select_create_new_user_option(make_session, users) -> None:
    users.save(User(name="Ana"))
    session, io = make_session(["2", "Carla"])

    menu.select_user(session)

    assert session.current_user.name == "Carla"
    assert len(users.find_all()) == 2


def test_add_view_finish_unfinish_remove(make_session, tasks) -> None:
    session, io = make_session(["Ana"])
    menu.create_new_user(session)

    io._answers = ["Buy milk"]
    menu.add_task(session)
    task_id = tasks.find_by_task_list_id(session.task_list_id)[0].id

    io.lines.clear()
    menu.view_all_tasks(session)
    assert io.lines[-1] == f"1. [ ] Buy milk (ID: {task_id})"

    io._answers = [str(task_id)]
    menu.mark_task_finished(session)
    assert tasks.find_by_id(task_id).finished is True
    assert io.lines[-1] == 'Task "Buy milk" marked as finished.'

    io.lines.clear()
    menu.view_all_tasks(session)
    assert io.lines[-1] == f"1. [✓] Buy milk (ID: {task_id})"

    io._answers = [str(task_id)]
    menu.mark_task_unfinished(session)
    assert tasks.find_by_id(task_id).finished is False

    io._answers = [str(task_id)]
    menu.remove_task(session)
    assert tasks.find_by_id(task_id) is None
    assert io.lines[-1] == 'Task "Buy milk" removed successfully.'

    menu.view_all_tasks(session)
    assert io.lines[-1] == "No tasks found."


def test_handlers_need_a_logged_in_user(make_session) -> None:
    session, io = make_session([])

    for handler in (
        menu.view_all_tasks,
        menu.add_task,
        menu.mark_task_finished,
        menu.mark_task_unfinished,
        menu.remove_task,
    ):
        io.lines.clear()
        handler(session)
        assert io.lines == ["No user logged in or no task list available."]


def test_invalid_task_input(make_session) -> None:
    session, io = make_session(["Ana"])
    menu.create_new_user(session)

    io._answers = ["  "]
    menu.add_task(session)
    assert io.lines[-1] == "Task description cannot be empty."

    io._answers = ["abc"]
    menu.mark_task_finished(session)
    assert io.lines[-1] == "Invalid task ID."

    io._answers = ["404"]
    menu.remove_task(session)
    assert io.lines[-1] == "Task not found."


def test_menu_rejects_unknown_option_and_keeps_going(make_session) -> None:
    session, io = make_session(["Ana", "42", "1", "7"])

    menu.run_console(session)

    assert "Invalid option. Please try again." in io.output
    assert "No tasks found." in io.output
    assert io.lines[-1] == "Goodbye!"


def test_store_failure_is_printed_and_loop_continues(make_session, monkeypatch) -> None:
    session, io = make_session(["Ana", "2", "Buy milk", "7"])

    def broken(task: Task, task_list_id: int) -> Task:
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(session.tasks, "save", broken)

    menu.run_console(session)

    assert any(line.startswith("An error occurred:") and "disk I/O error" in line for line in io.lines)
    assert io.lines[-1] == "Goodbye!"


def test_eof_exits_cleanly(make_session) -> None:
    session, io = make_session(["Ana"])

    menu.run_console(session)

    assert io.lines[-1] == "\nGoodbye!"


def test_main_runs_against_database_url(tmp_path, monkeypatch, capsys) -> None:
    answers = iter(["Ana", "2", "Walk the dog", "1", "7"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))

    menu.main(["--database-url", f"sqlite:///{tmp_path / 'console.sqlite3'}"])

    out = capsys.readouterr().out
    assert "Welcome to the TODO App!" in out
    assert "[ ] Walk the dog" in out
    assert "Goodbye!" in out


def test_task_id_must_be_plain_integer(make_session) -> None:
    session, io = make_session(["Ana"])
    menu.create_new_user(session)

    for raw in ("1_0", "99999999999999999999"):
        io._answers = [raw]
        menu.mark_task_finished(session)
        assert io.lines[-1] == "Invalid task ID."


def test_store_failure_during_user_selection_is_printed(make_session, monkeypatch) -> None:
    session, io = make_session([])

    def broken():
        raise OperationalError("SELECT", {}, Exception("unable to open database file"))

    monkeypatch.setattr(session.users, "find_all", broken)

    menu.run_console(session)

    assert io.lines[-1].startswith("An error occurred:")
    assert "unable to open database file" in io.lines[-1]
