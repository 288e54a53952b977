"""Collection merger and nested patcher.

Held collections are plain lists of records keyed by ``id``. Merging keeps
the held objects (and therefore every outside reference to them) and
copies onto them only the fields the incoming record carries.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, MutableSequence
from typing import Any

from pygta.models._base import GtaRecord, RecordId, TRecord


def find_index(records: MutableSequence[TRecord], record_id: RecordId | None) -> int:
    """Return the position of the record with *record_id*, or ``-1``."""
    for index, record in enumerate(records):
        if getattr(record, "id", None) == record_id:
            return index
    return -1


def find_record(records: MutableSequence[TRecord], record_id: RecordId | None) -> TRecord | None:
    index = find_index(records, record_id)
    if index == -1:
        return None
    return records[index]


def merge_fields(target: GtaRecord, patch: GtaRecord | dict[str, Any]) -> None:
    """Copy the fields present in *patch* onto *target*, in place.

    Fields absent from the patch keep their current value on *target*.

    Declared fields are matched by name or alias. Any other key is stored
    as an extra field, even when it shadows a model attribute such as
    ``copy`` or ``json``.
    """
    data = patch if isinstance(patch, dict) else patch.patch_data()
    fields = type(target).model_fields
    aliases = {info.alias: name for name, info in fields.items() if info.alias}
    for key, value in data.items():
        name = key if key in fields else aliases.get(key)
        if name is not None:
            setattr(target, name, value)
            continue
        # Records are extra="allow", so the extra dict always exists.
        target.__pydantic_extra__[key] = value  # type: ignore[index]


def upsert_records(records: MutableSequence[TRecord], incoming: Iterable[TRecord]) -> None:
    """Update held records by id, append the ones not held yet.

    Updated records keep their position; new records are appended in
    incoming order. Nothing is removed.
    """
    for record in incoming:
        existing = find_record(records, record.id)
        if existing is not None:
            merge_fields(existing, record)
        else:
            records.append(record)


def replace_records(records: MutableSequence[TRecord], incoming: Iterable[TRecord]) -> None:
    """Discard the held records and hold *incoming* instead."""
    records[:] = list(incoming)


def remove_records(records: MutableSequence[TRecord], record_ids: Iterable[RecordId]) -> None:
    """Remove the records whose id is listed; unknown ids are ignored."""
    for record_id in record_ids:
        index = find_index(records, record_id)
        if index != -1:
            del records[index]


def patch_nested(
    owners: MutableSequence[Any],
    incoming: Iterable[TRecord],
    *,
    owner_key: Callable[[TRecord], RecordId | None],
    children: Callable[[Any], MutableSequence[TRecord]],
    on_missing_owner: Callable[[TRecord], None] | None = None,
) -> None:
    """Upsert *incoming* child records into the sub-collection of their owner.

    The owner of each child is looked up in *owners* by ``owner_key(child)``.
    Children whose owner is not held are dropped (reported through
    *on_missing_owner* when given); no owner is ever created.
    """
    for child in incoming:
        owner = find_record(owners, owner_key(child))
        if owner is None:
            if on_missing_owner is not None:
                on_missing_owner(child)
            continue
        upsert_records(children(owner), [child])


def loose_equals(left: Any, right: Any) -> bool:
    """Compare two keys, treating ``5`` and ``"5"`` as equal."""
    if left == right:
        return True
    if left is None or right is None:
        return False
    return str(left) == str(right)
