from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from .db import Base


class UserRow(Base):
    __tablename__ = "User"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)

    # passive_deletes="all": the store, not the ORM, decides what happens to dependents
    task_list = relationship(
        "TaskListRow",
        back_populates="user",
        uselist=False,
        passive_deletes="all",
    )


class TaskListRow(Base):
    __tablename__ = "TaskList"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column("userId", Integer, ForeignKey("User.id"), nullable=False, unique=True)

    user = relationship("UserRow", back_populates="task_list")
    tasks = relationship(
        "TaskRow",
        back_populates="task_list",
        order_by="TaskRow.id",
        passive_deletes="all",
    )


class TaskRow(Base):
    __tablename__ = "Task"

    id = Column(Integer, primary_key=True, autoincrement=True)
    description = Column(Text, nullable=False)
    finished = Column(Boolean, nullable=False, default=False)
    task_list_id = Column(
        "taskListId", Integer, ForeignKey("TaskList.id"), nullable=False, index=True
    )

    task_list = relationship("TaskListRow", back_populates="tasks")
