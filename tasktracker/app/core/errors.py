from typing import Any, Optional


class RecordNotFoundError(LookupError):
    """Raised by a repository when an update/delete targets a missing row."""

    def __init__(self, entity: str, entity_id: int):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ApiError(Exception):
    """HTTP-facing failure rendered as {"error": ..., "details": ...}."""

    def __init__(self, status_code: int, message: str, *, details: Optional[Any] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details

    def to_payload(self) -> dict:
        payload = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload
