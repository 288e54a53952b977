"""Custom exception hierarchy for pygta."""

from __future__ import annotations


class GtaError(Exception):
    """Base exception for all pygta errors."""


class GtaInvalidActionError(GtaError):
    """A command received an action tag (or name) outside its vocabulary.

    Raised before the command touches any state, so the store is left
    exactly as it was.
    """

    def __init__(
        self,
        message: str,
        *,
        command: str = "",
        action: str | None = None,
    ) -> None:
        self.command = command
        self.action = action
        super().__init__(message)
