from typing import Optional

from pydantic import BaseModel


class UserBody(BaseModel):
    name: Optional[str] = None


class TaskBody(BaseModel):
    description: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
