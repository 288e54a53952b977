"""Login (session credential) model."""

from __future__ import annotations

from typing import Any

from pygta.models._base import GtaRecord, RecordId


class Login(GtaRecord):
    """Credential payload of the current session.

    The store treats the login as opaque; the declared fields are the ones
    other components commonly read.
    """

    id: RecordId | None = None
    login: Any = None
    """Account name used to authenticate."""
    token: Any = None
    """Session token, never logged (see :func:`pygta._redact.redact_for_log`)."""
