from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol

from ..models.edit_event import EditEvent

"""Edit notification registry.

Handlers are registered per (kind, resource) pair, where the resource is the
spreadsheet id. One-time setup goes through ensure_single_handler(), which
looks up existing registrations before creating one, so running setup twice
never delivers the same edit to two handlers.
"""

__all__ = [
    "ON_EDIT",
    "DuplicateHandlerError",
    "EditDispatcher",
    "EditHandler",
    "HandlerRegistry",
    "ensure_single_handler",
]

logger = logging.getLogger(__name__)

ON_EDIT = "on_edit"

EditHandler = Callable[[EditEvent], Any]


class DuplicateHandlerError(Exception):
    """Raised when a handler of the same kind is already registered for a resource."""


class HandlerRegistry(Protocol):
    def handler_kinds(self, resource_id: str) -> list[str]:
        ...

    def register(self, kind: str, resource_id: str, handler: EditHandler) -> None:
        ...


class EditDispatcher:
    """In-process registry that delivers edit notifications to handlers."""

    def __init__(self) -> None:
        self._handlers: dict[tuple[str, str], EditHandler] = {}

    def handler_kinds(self, resource_id: str) -> list[str]:
        return [kind for (kind, rid) in self._handlers if rid == resource_id]

    def register(self, kind: str, resource_id: str, handler: EditHandler) -> None:
        key = (kind, resource_id)
        if key in self._handlers:
            raise DuplicateHandlerError(f"handler '{kind}' already registered for {resource_id}")
        self._handlers[key] = handler

    def dispatch(self, resource_id: str, event: EditEvent) -> list[Any]:
        """Deliver event to the edit handler registered for resource_id.

        Returns the handler's return value in a list (empty when none is registered).
        """
        handler = self._handlers.get((ON_EDIT, resource_id))
        if handler is None:
            logger.debug(f"no edit handler for {resource_id}; dropped row={event.row} col={event.column}")
            return []
        return [handler(event)]


def ensure_single_handler(
    registry: HandlerRegistry, kind: str, resource_id: str, handler: EditHandler
) -> bool:
    """Register handler unless one of the same kind exists for resource_id.

    Returns:
        True if a new handler was registered, False if one was already present
    """
    if kind in registry.handler_kinds(resource_id):
        logger.info(f"handler '{kind}' already registered for {resource_id}")
        return False
    registry.register(kind, resource_id, handler)
    logger.info(f"handler '{kind}' registered for {resource_id}")
    return True
