"""Time-entry (pointage) model."""

from __future__ import annotations

from pygta.models._base import GtaRecord, RecordId


class Pointage(GtaRecord):
    """A time entry, held only as a member of the selection set."""

    id: RecordId
