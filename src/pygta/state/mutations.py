"""State mutations.

Each function applies one structural change to an explicit
:class:`pygta.state.store.StoreState`. They perform no validation of
action tags and no notification; :class:`pygta.state.store.GtaStore`
is the only caller.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import TYPE_CHECKING, Any

from pygta.models._base import GtaRecord, RecordId
from pygta.models.element import Element
from pygta.models.login import Login
from pygta.models.personnel import GtaPeriode, PersonnelDeclaration
from pygta.models.pointage import Pointage
from pygta.models.semaine import Semaine
from pygta.models.structure import Structure
from pygta.state import weeks
from pygta.state.events import ElementsAction, SelectionAction, SemainesAction
from pygta.state.merge import merge_fields, patch_nested, remove_records, replace_records, upsert_records

if TYPE_CHECKING:
    from pygta.state.store import StoreState


def open_element(state: StoreState, element: GtaRecord | None) -> None:
    state.opened_element = element


def close_element(state: StoreState) -> None:
    state.opened_element = None


def set_elements(
    state: StoreState,
    action: ElementsAction,
    elements: Sequence[Element] | Sequence[RecordId],
) -> None:
    if action == ElementsAction.UPDATE:
        upsert_records(state.elements, elements)  # type: ignore[arg-type]
    elif action == ElementsAction.REPLACE:
        replace_records(state.elements, elements)  # type: ignore[arg-type]
    else:
        remove_records(state.elements, elements)  # type: ignore[arg-type]


def update_opened(state: StoreState, data: GtaRecord | dict[str, Any]) -> bool:
    """Merge *data* onto the opened record.

    Returns ``False`` (and changes nothing) when no record is open.
    """
    if state.opened_element is None:
        return False
    merge_fields(state.opened_element, data)
    return True


def set_login(state: StoreState, login: Login | None) -> None:
    state.login = login


def set_structures(state: StoreState, structures: Iterable[Structure]) -> None:
    state.structures = list(structures)


def set_tmp_element(state: StoreState, data: GtaRecord | None) -> None:
    state.tmp_element = data


def set_structure_id(state: StoreState, structure_id: RecordId | None) -> None:
    state.active_structure_id = structure_id


def pointage_selected(state: StoreState, action: SelectionAction, pointage: Pointage | None = None) -> None:
    if action == SelectionAction.ADD and pointage is not None:
        state.pointage_selected.add(pointage)
    elif action == SelectionAction.REMOVE and pointage is not None:
        state.pointage_selected.remove(pointage)
    else:
        state.pointage_selected.reset()


def personnels_declaration(
    state: StoreState,
    action: SelectionAction,
    personnels: Iterable[PersonnelDeclaration] = (),
) -> None:
    selection = state.personnels_declarations
    if action == SelectionAction.ADD:
        selection.add_many(personnels)
    elif action == SelectionAction.REMOVE:
        selection.remove_many(personnels)
    elif action == SelectionAction.REFRESH:
        selection.refresh(personnels)
    else:
        selection.reset()


def personnel_gta_periodes(
    state: StoreState,
    gta_periodes: Iterable[GtaPeriode],
    *,
    on_missing_owner: Callable[[GtaPeriode], None] | None = None,
) -> None:
    patch_nested(
        state.personnels_declarations.items,
        gta_periodes,
        owner_key=lambda periode: periode.structure_personnel_id,
        children=lambda personnel: personnel.gta_periodes,
        on_missing_owner=on_missing_owner,
    )


def set_semaines(state: StoreState, action: SemainesAction, semaines: Iterable[Semaine]) -> None:
    if action == SemainesAction.ADD_START:
        weeks.add_start(state.semaines, semaines)
    elif action == SemainesAction.ADD_END:
        weeks.add_end(state.semaines, semaines)
    else:
        weeks.refresh_weeks(state.semaines, semaines)
