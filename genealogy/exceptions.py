"""
Errors raised by the genealogy store.

Every failing store operation leaves the store exactly as it was before
the call, so callers may catch any of these and keep using the store.
"""

from typing import Any


class GenealogyError(Exception):
    """Base class for all genealogy errors."""

    def __init__(self, identifier: Any = None, message: str = ""):
        self.identifier = identifier
        super().__init__(message or f"{type(self).__name__}: {identifier!r}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0] if self.args else type(self).__name__


class NotFound(GenealogyError, KeyError):
    """An identifier was required to be present but is not."""


class AlreadyExists(GenealogyError):
    """An identifier was required to be absent but is present."""


class CannotRemoveStem(GenealogyError):
    """Attempted to remove the stem entity."""


class IdentifierMismatch(GenealogyError, ValueError):
    """A payload factory produced a payload carrying a different identifier."""

    def __init__(self, identifier: Any, payload_id: Any):
        self.payload_id = payload_id
        super().__init__(
            identifier,
            f"payload built for {identifier!r} reports id {payload_id!r}",
        )


class IteratorInvalidated(GenealogyError, RuntimeError):
    """A children iterator was used after its child set changed."""
