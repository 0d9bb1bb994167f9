"""Domain entities: users own one task list, task lists hold tasks.

Entities are plain data plus a couple of mutators. They do no validation of
their own (empty names or descriptions are rejected by the HTTP and console
layers). Rows are mapped onto entities declaratively through
``model_validate(row)``; nested relations are always loaded in full.
"""

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Task(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    description: str
    finished: bool = False

    def finish(self) -> None:
        self.finished = True

    def unfinish(self) -> None:
        self.finished = False


class TaskList(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    tasks: List[Task] = Field(default_factory=list)

    def add(self, task: Task) -> None:
        self.tasks.append(task)

    def remove(self, task: Task) -> None:
        """Drop every task sharing ``task``'s description."""

        self.tasks = [t for t in self.tasks if t.description != task.description]


class User(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    name: str
    task_list: Optional[TaskList] = Field(
        default=None,
        validation_alias=AliasChoices("task_list", "taskList"),
        serialization_alias="taskList",
    )
