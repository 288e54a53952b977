"""Action tag validation.

Commands that accept an action tag resolve it here before touching any
state, so an unknown tag never leaves a partial mutation behind.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TypeVar

from pygta.exceptions import GtaInvalidActionError
from pygta.state.events import ElementsAction, SemainesAction, StoreCommand

TAction = TypeVar("TAction", bound=StrEnum)


def resolve_action(
    command: StoreCommand,
    vocabulary: type[TAction],
    action: str | None,
    *,
    allowed: frozenset[TAction] | None = None,
    default: TAction | None = None,
) -> TAction:
    """Map a raw action tag onto *vocabulary*.

    ``None`` resolves to *default* when one is given. Anything else that is
    not a member of *vocabulary* (or of *allowed*, when given) raises
    :class:`GtaInvalidActionError`.
    """
    if action is None and default is not None:
        return default
    try:
        resolved = vocabulary(action)
    except ValueError:
        resolved = None
    if resolved is None or (allowed is not None and resolved not in allowed):
        raise GtaInvalidActionError(
            f"Action {action!r} does not exist for command {command.value}",
            command=command.value,
            action=action,
        )
    return resolved


def resolve_elements_action(action: str | None) -> ElementsAction:
    return resolve_action(
        StoreCommand.REFRESH_ELEMENTS,
        ElementsAction,
        action,
        default=ElementsAction.UPDATE,
    )


def resolve_add_semaines_action(action: str | None) -> SemainesAction:
    # Refresh has its own command; only the two insertion modes are accepted here.
    return resolve_action(
        StoreCommand.ADD_SEMAINES,
        SemainesAction,
        action,
        allowed=frozenset({SemainesAction.ADD_START, SemainesAction.ADD_END}),
    )
