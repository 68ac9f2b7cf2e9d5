"""
Base class and registration decorator for bridge handler groups.

A handler group bundles the operations of one area of the app. Methods
decorated with ``@operation`` are picked up by ``Bridge.add_handler``; each
takes the request payload and returns JSON-ready data.
"""

from typing import Any, Callable, Optional

from bizdesk.db import BackOfficeRepository
from bizdesk.models import record_id


def operation(name: str, reply: str, error_reply: Optional[str] = None):
    """
    Register a handler method for an operation.

    Args:
        name: Operation name the UI sends, e.g. "save-client"
        reply: Reply name on success (and on failure unless error_reply is set)
        error_reply: Reply name used for failures
    """

    def decorator(func: Callable[[Any, Any], Any]):
        func.__bridge_operation__ = (name, reply, error_reply or reply)
        return func

    return decorator


class HandlerGroup:
    """Base class for a group of related operations."""

    def __init__(self, repository: BackOfficeRepository):
        self.repository = repository

    @property
    def name(self) -> str:
        return type(self).__name__

    def get_operations(self):
        """Yield (name, reply, error_reply, bound method) for each operation."""
        for attr in dir(type(self)):
            func = getattr(type(self), attr)
            spec = getattr(func, "__bridge_operation__", None)
            if spec:
                name, reply, error_reply = spec
                yield name, reply, error_reply, getattr(self, attr)


def payload_id(payload: Any, name: str = "id") -> int:
    """
    Read a record id from a bare value or from a mapping.

    The UI sends lookups either as the id itself or as {"<name>": id}.
    """
    if isinstance(payload, dict):
        return record_id(payload.get(name), name)
    return record_id(payload, name)


def rows(records) -> list[dict]:
    return [record.to_dict() for record in records]