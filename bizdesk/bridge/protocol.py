"""
Request/response contract between the UI and the data layer.

Every request names an operation and carries an optional payload and a
caller-chosen request_id. Every response echoes the request_id, names the
reply, and carries either data (ok=True) or an error message (ok=False).
"""

from dataclasses import dataclass
from typing import Any, Optional

from bizdesk.errors import ValidationError


@dataclass
class Request:
    operation: str
    payload: Any = None
    request_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Request":
        """Build a request from a decoded JSON object."""
        if not isinstance(data, dict):
            raise ValidationError("request must be an object")
        operation = data.get("operation")
        if not isinstance(operation, str) or not operation.strip():
            raise ValidationError("operation is required", field="operation")
        request_id = data.get("request_id")
        return cls(
            operation=operation.strip(),
            payload=data.get("payload"),
            request_id=None if request_id is None else str(request_id),
        )


@dataclass
class Response:
    operation: str
    reply: str
    ok: bool = True
    data: Any = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    field: Optional[str] = None
    request_id: Optional[str] = None

    @classmethod
    def success(cls, request: Request, reply: str, data: Any = None) -> "Response":
        return cls(
            operation=request.operation,
            reply=reply,
            data=data,
            request_id=request.request_id,
        )

    @classmethod
    def failure(
        cls,
        request: Request,
        reply: str,
        error: str,
        error_type: str,
        field: Optional[str] = None,
    ) -> "Response":
        return cls(
            operation=request.operation,
            reply=reply,
            ok=False,
            error=error,
            error_type=error_type,
            field=field,
            request_id=request.request_id,
        )

    def to_dict(self) -> dict:
        result = {
            "operation": self.operation,
            "reply": self.reply,
            "ok": self.ok,
            "request_id": self.request_id,
        }
        if self.ok:
            result["data"] = self.data
        else:
            result["error"] = self.error
            result["error_type"] = self.error_type
            if self.field:
                result["field"] = self.field
        return result
