"""In-memory entity synchronization store.

This is the only component allowed to mutate the held collections. The
fetch layer hands it records through named commands; the rendering layer
reads the collections and subscribes to :class:`StoreEvent`s.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict

from pygta._redact import redact_for_log
from pygta.config import StoreConfig
from pygta.exceptions import GtaInvalidActionError
from pygta.models._base import GtaRecord, RecordId, TRecord, coerce_record
from pygta.models.element import Element
from pygta.models.login import Login
from pygta.models.personnel import GtaPeriode, PersonnelDeclaration
from pygta.models.pointage import Pointage
from pygta.models.semaine import Semaine
from pygta.models.structure import Structure
from pygta.state import mutations
from pygta.state.events import (
    ElementsAction,
    SelectionAction,
    SemainesAction,
    StateSection,
    StoreCommand,
    StoreEvent,
)
from pygta.state.merge import find_record, loose_equals
from pygta.state.policy import resolve_add_semaines_action, resolve_elements_action
from pygta.state.selection import SelectionSet

_logger = logging.getLogger(__name__)

Subscriber = Callable[[StoreEvent], None]


@dataclass
class StoreState:
    """Everything the store holds. Owned by exactly one :class:`GtaStore`."""

    structures: list[Structure] = field(default_factory=list)
    active_structure_id: RecordId | None = None
    login: Login | None = None
    elements: list[Element] = field(default_factory=list)
    opened_element: GtaRecord | None = None
    tmp_element: GtaRecord | None = None
    pointage_selected: SelectionSet[Pointage] = field(default_factory=SelectionSet)
    personnels_declarations: SelectionSet[PersonnelDeclaration] = field(default_factory=SelectionSet)
    semaines: list[Semaine] = field(default_factory=list)


class LoadResult(BaseModel):
    """Outcome of :meth:`GtaStore.load`.

    A miss is not an error: it tells the caller the element has to be
    fetched before it can be opened.
    """

    model_config = ConfigDict(frozen=True)

    element_id: RecordId
    element: Element | None = None

    @property
    def found(self) -> bool:
        return self.element is not None

    @property
    def fetch_needed(self) -> bool:
        return self.element is None


def _coerce_many(model: type[TRecord], values: Iterable[Any] | None) -> list[TRecord]:
    if values is None:
        return []
    return [coerce_record(model, value) for value in values]


def _as_batch(value: Any) -> list[Any]:
    """Accept either one record or an iterable of records."""
    if value is None:
        return []
    if isinstance(value, (GtaRecord, Mapping)):
        return [value]
    return list(value)


def _dump(record: GtaRecord | None) -> dict[str, Any] | None:
    if record is None:
        return None
    return record.model_dump(mode="json", by_alias=True)


def _loggable(payload: Any) -> Any:
    """Turn records nested in a command payload into plain dicts for logging."""
    if isinstance(payload, GtaRecord):
        return _dump(payload)
    if isinstance(payload, Mapping):
        return {key: _loggable(value) for key, value in payload.items()}
    if isinstance(payload, (list, tuple)):
        return [_loggable(item) for item in payload]
    return payload


class GtaStore:
    """Command façade over a :class:`StoreState`.

    Every command runs to completion and then notifies subscribers. The
    store is single-writer and synchronous; it never performs I/O.

    Usage::

        store = GtaStore()
        store.login({"login": "jdoe"}, [{"id": 1, "name": "Siège"}])
        store.switch_structure(1)
        store.refresh_elements([{"id": 10, "label": "Planning"}])
        if store.load(10).fetch_needed:
            ...
    """

    def __init__(
        self,
        state: StoreState | None = None,
        *,
        config: StoreConfig | None = None,
        on_fetch_needed: Callable[[RecordId], None] | None = None,
    ) -> None:
        self._state = state if state is not None else StoreState()
        self._config = config or StoreConfig()
        self._on_fetch_needed = on_fetch_needed
        self._subscribers: list[Subscriber] = []

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def structures(self) -> list[Structure]:
        return self._state.structures

    @property
    def active_structure_id(self) -> RecordId | None:
        return self._state.active_structure_id

    @property
    def active_structure(self) -> Structure | None:
        """The structure whose id is the active structure id, if held."""
        structure_id = self._state.active_structure_id
        structure = find_record(self._state.structures, structure_id)
        if structure is None and structure_id is not None:
            self._dangling("Active structure %s is not among the loaded structures", structure_id)
        return structure

    @property
    def login_info(self) -> Login | None:
        return self._state.login

    @property
    def elements(self) -> list[Element]:
        return self._state.elements

    @property
    def opened_element(self) -> GtaRecord | None:
        return self._state.opened_element

    @property
    def tmp_element(self) -> GtaRecord | None:
        return self._state.tmp_element

    @property
    def pointage_selected(self) -> list[Pointage]:
        return self._state.pointage_selected.items

    @property
    def personnels_declarations(self) -> list[PersonnelDeclaration]:
        return self._state.personnels_declarations.items

    @property
    def semaines(self) -> list[Semaine]:
        return self._state.semaines

    def snapshot(self) -> dict[str, Any]:
        """Return a detached, JSON-friendly copy of the whole state."""
        state = self._state
        return {
            "structures": [_dump(s) for s in state.structures],
            "active_structure_id": state.active_structure_id,
            "login": _dump(state.login),
            "elements": [_dump(e) for e in state.elements],
            "opened_element": _dump(state.opened_element),
            "tmp_element": _dump(state.tmp_element),
            "pointage_selected": [_dump(p) for p in state.pointage_selected],
            "personnels_declarations": [_dump(p) for p in state.personnels_declarations],
            "semaines": [_dump(s) for s in state.semaines],
        }

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register *callback* for every completed command.

        Returns a callable that removes the subscription.
        """
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def _publish(
        self,
        command: StoreCommand,
        *sections: StateSection,
        action: str | None = None,
        **detail: Any,
    ) -> None:
        event = StoreEvent(command=command, sections=frozenset(sections), action=action, detail=detail)
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                _logger.warning("Store subscriber failed on %s", command.value, exc_info=True)

    def _log_command(self, command: StoreCommand, payload: Any = None) -> None:
        if not _logger.isEnabledFor(logging.DEBUG):
            return
        if self._config.log_payloads and payload is not None:
            _logger.debug(
                "Command %s payload=%s",
                command.value,
                redact_for_log(_loggable(payload), max_string=self._config.log_max_string),
            )
        else:
            _logger.debug("Command %s", command.value)

    def _dangling(self, message: str, *args: Any) -> None:
        level = logging.WARNING if self._config.warn_on_dangling else logging.DEBUG
        _logger.log(level, message, *args)

    # ------------------------------------------------------------------
    # Opened element
    # ------------------------------------------------------------------

    def load(self, element_id: RecordId) -> LoadResult:
        """Open the held element with *element_id*.

        When the element is not held nothing changes; the result reports
        ``fetch_needed`` and the ``on_fetch_needed`` hook is called.
        """
        self._log_command(StoreCommand.LOAD, {"element_id": element_id})
        element = next((e for e in self._state.elements if loose_equals(e.id, element_id)), None)
        if element is None:
            _logger.debug("Element %s not loaded; fetch required", element_id)
            if self._on_fetch_needed is not None:
                try:
                    self._on_fetch_needed(element_id)
                except Exception:
                    _logger.warning("on_fetch_needed callback failed for %s", element_id, exc_info=True)
            return LoadResult(element_id=element_id)

        mutations.open_element(self._state, element)
        self._publish(StoreCommand.LOAD, StateSection.OPENED, element_id=element.id)
        return LoadResult(element_id=element_id, element=element)

    def unload(self) -> None:
        self._log_command(StoreCommand.UNLOAD)
        mutations.close_element(self._state)
        self._publish(StoreCommand.UNLOAD, StateSection.OPENED)

    def open(self, record: GtaRecord | Mapping[str, Any]) -> None:
        """Open *record* as given; no lookup in the held elements."""
        self._log_command(StoreCommand.OPEN, record)
        element = record if isinstance(record, GtaRecord) else coerce_record(Element, record)
        mutations.open_element(self._state, element)
        self._publish(StoreCommand.OPEN, StateSection.OPENED)

    def close(self) -> None:
        self._log_command(StoreCommand.CLOSE)
        mutations.close_element(self._state)
        self._publish(StoreCommand.CLOSE, StateSection.OPENED)

    def refresh_opened(self, data: GtaRecord | Mapping[str, Any]) -> None:
        """Merge *data* onto the opened record.

        Silently does nothing when no record is open.
        """
        self._log_command(StoreCommand.REFRESH_OPENED, data)
        patch = data if isinstance(data, GtaRecord) else dict(data)
        if not mutations.update_opened(self._state, patch):
            self._dangling("refresh_opened called with no opened element")
        self._publish(StoreCommand.REFRESH_OPENED, StateSection.OPENED)

    def set_tmp_element(self, data: GtaRecord | Mapping[str, Any] | None) -> None:
        """Store (or clear, with ``None``) a working copy of the opened record."""
        self._log_command(StoreCommand.SET_TMP_ELEMENT, data)
        tmp = data if data is None or isinstance(data, GtaRecord) else coerce_record(Element, data)
        mutations.set_tmp_element(self._state, tmp)
        self._publish(StoreCommand.SET_TMP_ELEMENT, StateSection.TMP_ELEMENT)

    # ------------------------------------------------------------------
    # Elements
    # ------------------------------------------------------------------

    def refresh_elements(
        self,
        elements: Iterable[Any],
        action: str | None = None,
    ) -> None:
        """Update, replace or remove held elements.

        ``action`` is one of ``update`` (default), ``replace`` or ``remove``.
        For ``remove``, *elements* are ids.
        """
        resolved = resolve_elements_action(action)
        self._log_command(StoreCommand.REFRESH_ELEMENTS, {"action": resolved.value, "elements": elements})
        if resolved == ElementsAction.REMOVE:
            payload: list[Any] = list(elements)
        else:
            payload = _coerce_many(Element, elements)
        mutations.set_elements(self._state, resolved, payload)
        self._publish(
            StoreCommand.REFRESH_ELEMENTS,
            StateSection.ELEMENTS,
            action=resolved.value,
            count=len(payload),
        )

    # ------------------------------------------------------------------
    # Session & structures
    # ------------------------------------------------------------------

    def login(
        self,
        login: Login | Mapping[str, Any],
        structures: Iterable[Structure | Mapping[str, Any]] = (),
    ) -> None:
        """Record an opened session together with its visible structures."""
        self._log_command(StoreCommand.LOGIN, {"login": login, "structures": structures})
        login_record = coerce_record(Login, login)
        structure_records = _coerce_many(Structure, structures)
        mutations.set_login(self._state, login_record)
        mutations.set_structures(self._state, structure_records)
        self._publish(StoreCommand.LOGIN, StateSection.SESSION, StateSection.STRUCTURES)

    def logout(self) -> None:
        self._log_command(StoreCommand.LOGOUT)
        mutations.set_login(self._state, None)
        mutations.set_structures(self._state, [])
        self._publish(StoreCommand.LOGOUT, StateSection.SESSION, StateSection.STRUCTURES)

    def set_active_structure(self, structure_id: RecordId | None) -> None:
        self._log_command(StoreCommand.SET_ACTIVE_STRUCTURE, {"structure_id": structure_id})
        self._check_structure(structure_id)
        mutations.set_structure_id(self._state, structure_id)
        self._publish(StoreCommand.SET_ACTIVE_STRUCTURE, StateSection.STRUCTURES)

    def switch_structure(self, structure_id: RecordId | None) -> None:
        """Make *structure_id* active, dropping everything loaded for the previous one."""
        self._log_command(StoreCommand.SWITCH_STRUCTURE, {"structure_id": structure_id})
        self._check_structure(structure_id)
        mutations.close_element(self._state)
        mutations.set_tmp_element(self._state, None)
        mutations.set_elements(self._state, ElementsAction.REPLACE, [])
        mutations.set_structure_id(self._state, structure_id)
        self._publish(
            StoreCommand.SWITCH_STRUCTURE,
            StateSection.OPENED,
            StateSection.TMP_ELEMENT,
            StateSection.ELEMENTS,
            StateSection.STRUCTURES,
        )

    def _check_structure(self, structure_id: RecordId | None) -> None:
        if structure_id is not None and find_record(self._state.structures, structure_id) is None:
            self._dangling("Structure %s is not among the loaded structures", structure_id)

    # ------------------------------------------------------------------
    # Pointage selection
    # ------------------------------------------------------------------

    def add_pointage(self, pointage: Pointage | Mapping[str, Any]) -> None:
        self._log_command(StoreCommand.ADD_POINTAGE, pointage)
        mutations.pointage_selected(self._state, SelectionAction.ADD, coerce_record(Pointage, pointage))
        self._publish(StoreCommand.ADD_POINTAGE, StateSection.POINTAGES, action=SelectionAction.ADD.value)

    def remove_pointage(self, pointage: Pointage | Mapping[str, Any]) -> None:
        self._log_command(StoreCommand.REMOVE_POINTAGE, pointage)
        mutations.pointage_selected(self._state, SelectionAction.REMOVE, coerce_record(Pointage, pointage))
        self._publish(StoreCommand.REMOVE_POINTAGE, StateSection.POINTAGES, action=SelectionAction.REMOVE.value)

    def reset_pointage(self) -> None:
        self._log_command(StoreCommand.RESET_POINTAGE)
        mutations.pointage_selected(self._state, SelectionAction.RESET)
        self._publish(StoreCommand.RESET_POINTAGE, StateSection.POINTAGES, action=SelectionAction.RESET.value)

    # ------------------------------------------------------------------
    # Personnel selection
    # ------------------------------------------------------------------

    def _personnel(
        self,
        command: StoreCommand,
        action: SelectionAction,
        personnels: Any = None,
    ) -> None:
        self._log_command(command, personnels)
        records = _coerce_many(PersonnelDeclaration, _as_batch(personnels))
        mutations.personnels_declaration(self._state, action, records)
        self._publish(command, StateSection.PERSONNELS, action=action.value, count=len(records))

    def add_personnel(self, personnel: Any) -> None:
        """Select one personnel declaration, or each of a list of them."""
        self._personnel(StoreCommand.ADD_PERSONNEL, SelectionAction.ADD, personnel)

    def remove_personnel(self, personnel: Any) -> None:
        self._personnel(StoreCommand.REMOVE_PERSONNEL, SelectionAction.REMOVE, personnel)

    def reset_personnel(self) -> None:
        self._personnel(StoreCommand.RESET_PERSONNEL, SelectionAction.RESET)

    def refresh_personnel(self, personnels: Any) -> None:
        """Merge fresh data onto already-selected personnel declarations."""
        self._personnel(StoreCommand.REFRESH_PERSONNEL, SelectionAction.REFRESH, personnels)

    def refresh_personnel_gta_periodes(self, gta_periodes: Iterable[GtaPeriode | Mapping[str, Any]]) -> None:
        """Upsert GTA periods onto their owning (selected) personnel declaration."""
        self._log_command(StoreCommand.REFRESH_PERSONNEL_GTA_PERIODES, gta_periodes)
        records = _coerce_many(GtaPeriode, gta_periodes)

        def _missing_owner(periode: GtaPeriode) -> None:
            self._dangling(
                "Dropping GTA period %s: personnel %s is not loaded",
                periode.id,
                periode.structure_personnel_id,
            )

        mutations.personnel_gta_periodes(self._state, records, on_missing_owner=_missing_owner)
        self._publish(StoreCommand.REFRESH_PERSONNEL_GTA_PERIODES, StateSection.PERSONNELS, count=len(records))

    # ------------------------------------------------------------------
    # Semaines
    # ------------------------------------------------------------------

    def add_semaines(self, semaines: Iterable[Semaine | Mapping[str, Any]], action: str | None) -> None:
        """Prepend (``addStart``) or append (``addEnd``) weeks."""
        resolved = resolve_add_semaines_action(action)
        self._log_command(StoreCommand.ADD_SEMAINES, {"action": resolved.value, "semaines": semaines})
        records = _coerce_many(Semaine, semaines)
        mutations.set_semaines(self._state, resolved, records)
        self._publish(StoreCommand.ADD_SEMAINES, StateSection.SEMAINES, action=resolved.value, count=len(records))

    def refresh_semaines(self, semaines: Iterable[Semaine | Mapping[str, Any]]) -> None:
        self._log_command(StoreCommand.REFRESH_SEMAINES, semaines)
        records = _coerce_many(Semaine, semaines)
        mutations.set_semaines(self._state, SemainesAction.REFRESH, records)
        self._publish(
            StoreCommand.REFRESH_SEMAINES,
            StateSection.SEMAINES,
            action=SemainesAction.REFRESH.value,
            count=len(records),
        )

    # ------------------------------------------------------------------
    # Dispatch by name
    # ------------------------------------------------------------------

    def dispatch(self, command: str, payload: Any = None) -> Any:
        """Run a command by its camelCase name (``"refreshElements"``, ...).

        Payload shapes follow the fetch layer's conventions: ``login`` takes
        ``{"login": ..., "structures": [...]}``, ``refreshElements`` takes
        ``{"action": ..., "elements": [...]}``, ``addSemaines`` takes
        ``{"action": ..., "semaines": [...]}``; other commands take their
        argument directly.
        """
        try:
            name = StoreCommand(command)
        except ValueError:
            raise GtaInvalidActionError(f"Command {command!r} does not exist", command=command) from None

        handlers: dict[StoreCommand, Callable[[Any], Any]] = {
            StoreCommand.LOAD: self.load,
            StoreCommand.UNLOAD: lambda _: self.unload(),
            StoreCommand.OPEN: self.open,
            StoreCommand.CLOSE: lambda _: self.close(),
            StoreCommand.REFRESH_ELEMENTS: lambda p: self.refresh_elements(
                p.get("elements", []),
                action=p.get("action"),
            ),
            StoreCommand.REFRESH_OPENED: self.refresh_opened,
            StoreCommand.LOGIN: lambda p: self.login(p.get("login"), p.get("structures", [])),
            StoreCommand.LOGOUT: lambda _: self.logout(),
            StoreCommand.SWITCH_STRUCTURE: self.switch_structure,
            StoreCommand.SET_ACTIVE_STRUCTURE: self.set_active_structure,
            StoreCommand.SET_TMP_ELEMENT: self.set_tmp_element,
            StoreCommand.ADD_POINTAGE: self.add_pointage,
            StoreCommand.REMOVE_POINTAGE: self.remove_pointage,
            StoreCommand.RESET_POINTAGE: lambda _: self.reset_pointage(),
            StoreCommand.ADD_PERSONNEL: self.add_personnel,
            StoreCommand.REMOVE_PERSONNEL: self.remove_personnel,
            StoreCommand.RESET_PERSONNEL: lambda _: self.reset_personnel(),
            StoreCommand.REFRESH_PERSONNEL: self.refresh_personnel,
            StoreCommand.REFRESH_PERSONNEL_GTA_PERIODES: self.refresh_personnel_gta_periodes,
            StoreCommand.ADD_SEMAINES: lambda p: self.add_semaines(p.get("semaines", []), p.get("action")),
            StoreCommand.REFRESH_SEMAINES: self.refresh_semaines,
        }
        return handlers[name](payload)
