"""Personnel declaration and GTA period models."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field

from pygta.models._base import GtaRecord, RecordId


class GtaPeriode(GtaRecord):
    """A time range owned by exactly one personnel declaration.

    The owner is referenced by :attr:`structure_personnel_id`, sent by the
    API as ``structure__personnel_id``. Dates are kept as received.
    """

    id: RecordId
    structure_personnel_id: RecordId | None = Field(
        default=None,
        alias="structure__personnel_id",
        validation_alias=AliasChoices("structure__personnel_id", "structure_personnel_id"),
    )
    """Id of the owning :class:`PersonnelDeclaration`."""
    dd: Any = None
    """Start of the period."""
    df: Any = None
    """End of the period (``None`` while open-ended)."""


class PersonnelDeclaration(GtaRecord):
    """A member of a structure with a time declaration for the selected week.

    Fields are the personal details plus the nested :attr:`gta_periodes`.
    """

    id: RecordId
    nom: Any = None
    """Family name."""
    prenom: Any = None
    """Given name."""
    gta_periodes: list[GtaPeriode] = Field(default_factory=list)
    """Periods owned by this person, patched by the nested patcher."""
