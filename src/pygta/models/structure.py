"""Structure model."""

from __future__ import annotations

from typing import Any

from pygta.models._base import GtaRecord, RecordId


class Structure(GtaRecord):
    """An organizational scope (tenant) visible to the logged-in user.

    Only one structure is active at a time; see
    :attr:`pygta.state.store.GtaStore.active_structure`.
    """

    id: RecordId
    name: Any = None
    """Display name of the structure."""
