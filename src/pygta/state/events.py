"""Action vocabularies and change notifications.

Every command the store accepts is named by :class:`StoreCommand`; commands
that carry an action tag validate it against their own small vocabulary.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StoreCommand(StrEnum):
    LOAD = "load"
    UNLOAD = "unload"
    OPEN = "open"
    CLOSE = "close"
    REFRESH_ELEMENTS = "refreshElements"
    REFRESH_OPENED = "refreshOpened"
    LOGIN = "login"
    LOGOUT = "logout"
    SWITCH_STRUCTURE = "switchStructure"
    SET_ACTIVE_STRUCTURE = "setActiveStructure"
    SET_TMP_ELEMENT = "setTmpElement"
    ADD_POINTAGE = "addPointage"
    REMOVE_POINTAGE = "removePointage"
    RESET_POINTAGE = "resetPointage"
    ADD_PERSONNEL = "addPersonnel"
    REMOVE_PERSONNEL = "removePersonnel"
    RESET_PERSONNEL = "resetPersonnel"
    REFRESH_PERSONNEL = "refreshPersonnel"
    REFRESH_PERSONNEL_GTA_PERIODES = "refreshPersonnelGtaPeriodes"
    ADD_SEMAINES = "addSemaines"
    REFRESH_SEMAINES = "refreshSemaines"


class ElementsAction(StrEnum):
    UPDATE = "update"
    REPLACE = "replace"
    REMOVE = "remove"


class SemainesAction(StrEnum):
    ADD_START = "addStart"
    ADD_END = "addEnd"
    REFRESH = "refresh"


class SelectionAction(StrEnum):
    ADD = "add"
    REMOVE = "remove"
    RESET = "reset"
    REFRESH = "refresh"


class StateSection(StrEnum):
    """Parts of the state a command can touch."""

    SESSION = "session"
    STRUCTURES = "structures"
    ELEMENTS = "elements"
    OPENED = "opened"
    TMP_ELEMENT = "tmp_element"
    POINTAGES = "pointages"
    PERSONNELS = "personnels"
    SEMAINES = "semaines"


class StoreEvent(BaseModel):
    """Published to subscribers once a command has completed."""

    model_config = ConfigDict(frozen=True)

    command: StoreCommand
    sections: frozenset[StateSection] = Field(default_factory=frozenset)
    action: str | None = Field(default=None, description="Action tag the command ran with, if any.")
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    detail: dict[str, Any] = Field(default_factory=dict)
