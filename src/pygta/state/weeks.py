"""Ordered week sequence.

Semaines are held in chronological order and keyed by ``week`` instead of
``id``. Keys are compared loosely so ``5`` and ``"5"`` denote the same week.
"""

from __future__ import annotations

from collections.abc import Iterable, MutableSequence
from typing import Any

from pygta.models.semaine import Semaine
from pygta.state.merge import loose_equals


def find_week_index(semaines: MutableSequence[Semaine], week: Any) -> int:
    for index, semaine in enumerate(semaines):
        if loose_equals(semaine.week, week):
            return index
    return -1


def add_start(semaines: MutableSequence[Semaine], incoming: Iterable[Semaine]) -> None:
    """Prepend each incoming week, one at a time.

    Each insert lands ahead of the previous one, so ``[W0, W1]`` prepended to
    ``[W2, W3]`` yields ``[W1, W0, W2, W3]``.
    """
    for semaine in incoming:
        semaines.insert(0, semaine)


def add_end(semaines: MutableSequence[Semaine], incoming: Iterable[Semaine]) -> None:
    for semaine in incoming:
        semaines.append(semaine)


def refresh_weeks(semaines: MutableSequence[Semaine], incoming: Iterable[Semaine]) -> None:
    """Replace held weeks in place by key.

    Weeks not already held are ignored, except when nothing is held at all:
    then the incoming sequence becomes the held sequence.
    """
    incoming = list(incoming)
    if not semaines:
        semaines[:] = incoming
        return
    for semaine in incoming:
        index = find_week_index(semaines, semaine.week)
        if index > -1:
            semaines[index] = semaine
