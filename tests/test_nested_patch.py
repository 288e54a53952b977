from __future__ import annotations

from pygta.models.personnel import GtaPeriode, PersonnelDeclaration
from pygta.state.merge import patch_nested


def _patch(
    owners: list[PersonnelDeclaration],
    periodes: list[GtaPeriode],
    dropped: list[GtaPeriode] | None = None,
) -> None:
    patch_nested(
        owners,
        periodes,
        owner_key=lambda periode: periode.structure_personnel_id,
        children=lambda personnel: personnel.gta_periodes,
        on_missing_owner=dropped.append if dropped is not None else None,
    )


def test_existing_period_is_patched_in_place() -> None:
    periode = GtaPeriode(id=1, structure__personnel_id=10, dd="2024-01-01", df="2024-06-30")
    personnel = PersonnelDeclaration(id=10, nom="Martin", gta_periodes=[periode])

    _patch([personnel], [GtaPeriode.model_validate({"id": 1, "structure__personnel_id": 10, "df": "2024-12-31"})])

    assert personnel.gta_periodes == [periode]
    assert periode.dd == "2024-01-01"
    assert periode.df == "2024-12-31"


def test_unknown_period_is_appended_to_owner() -> None:
    personnel = PersonnelDeclaration(id=10, gta_periodes=[GtaPeriode(id=1, structure__personnel_id=10)])
    other = PersonnelDeclaration(id=11)

    _patch([personnel, other], [GtaPeriode(id=2, structure__personnel_id=10)])

    assert [p.id for p in personnel.gta_periodes] == [1, 2]
    assert other.gta_periodes == []


def test_period_without_owner_is_dropped() -> None:
    personnel = PersonnelDeclaration(id=10, nom="Martin")
    before = personnel.model_dump()
    dropped: list[GtaPeriode] = []
    orphan = GtaPeriode(id=3, structure__personnel_id=99)

    _patch([personnel], [orphan], dropped)

    assert personnel.model_dump() == before
    assert dropped == [orphan]
