"""Ephemeral multi-select membership lists."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Generic

from pygta.models._base import TRecord
from pygta.state.merge import find_index, find_record, merge_fields


class SelectionSet(Generic[TRecord]):
    """Order-preserving list of selected records.

    ``add`` does not check for duplicates: callers only add records they
    know are not selected yet.
    """

    def __init__(self, items: Iterable[TRecord] = ()) -> None:
        self.items: list[TRecord] = list(items)

    def __iter__(self) -> Iterator[TRecord]:
        return iter(self.items)

    def add(self, record: TRecord) -> None:
        self.items.append(record)

    def add_many(self, records: Iterable[TRecord]) -> None:
        for record in records:
            self.add(record)

    def remove(self, record: TRecord) -> None:
        """Drop the selected record sharing *record*'s id, if any."""
        index = find_index(self.items, record.id)
        if index != -1:
            del self.items[index]

    def remove_many(self, records: Iterable[TRecord]) -> None:
        for record in records:
            self.remove(record)

    def refresh(self, records: Iterable[TRecord]) -> None:
        """Merge fresh data onto already-selected records; never inserts."""
        for record in records:
            selected = find_record(self.items, record.id)
            if selected is not None:
                merge_fields(selected, record)

    def reset(self) -> None:
        self.items = []
