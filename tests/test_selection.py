from __future__ import annotations

from pygta.models.personnel import PersonnelDeclaration
from pygta.models.pointage import Pointage
from pygta.state.selection import SelectionSet


def _ids(selection: SelectionSet) -> list[int | str]:
    return [item.id for item in selection]


def test_add_appends_without_duplicate_check() -> None:
    selection: SelectionSet[Pointage] = SelectionSet()
    pointage = Pointage(id=1)

    selection.add(pointage)
    selection.add(pointage)

    assert _ids(selection) == [1, 1]


def test_remove_by_id_and_absent_is_noop() -> None:
    selection = SelectionSet([Pointage(id=1), Pointage(id=2), Pointage(id=3)])

    selection.remove(Pointage(id=2))
    selection.remove(Pointage(id=42))

    assert _ids(selection) == [1, 3]


def test_reset_clears() -> None:
    selection = SelectionSet([Pointage(id=1)])

    selection.reset()

    assert selection.items == []


def test_refresh_merges_only_selected_members() -> None:
    selected = PersonnelDeclaration(id=1, nom="Martin", prenom="Léa")
    selection = SelectionSet([selected])

    selection.refresh([PersonnelDeclaration(id=1, prenom="Lea"), PersonnelDeclaration(id=2, nom="Durand")])

    assert _ids(selection) == [1]
    assert selection.items[0] is selected
    assert selected.nom == "Martin"
    assert selected.prenom == "Lea"


def test_batch_add_and_remove() -> None:
    selection: SelectionSet[PersonnelDeclaration] = SelectionSet()

    selection.add_many([PersonnelDeclaration(id=1), PersonnelDeclaration(id=2), PersonnelDeclaration(id=3)])
    selection.remove_many([PersonnelDeclaration(id=1), PersonnelDeclaration(id=3)])

    assert _ids(selection) == [2]
