"""Generic loaded element."""

from __future__ import annotations

from pygta.models._base import GtaRecord, RecordId


class Element(GtaRecord):
    """A domain object fetched lazily by id.

    Elements carry arbitrary fields; only ``id`` is required.
    """

    id: RecordId
