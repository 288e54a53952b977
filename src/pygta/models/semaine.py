"""Weekly analytic summary model."""

from __future__ import annotations

from pydantic import Field

from pygta.models._base import GtaRecord


class Semaine(GtaRecord):
    """Aggregated figures for one week.

    Semaines are keyed by :attr:`week` rather than by id and are held in
    chronological order.
    """

    week: int | str = Field(...)
    """Week number (secondary key)."""
