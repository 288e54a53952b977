"""Base model for records held by the store.

Every record inherits from :class:`GtaRecord` which provides:

* ``extra="allow"`` so API fields the models don't declare are kept
  on the record and merged like any other field.
* Mutability: the store updates held records in place so that every
  holder of a reference sees live data.
* :meth:`GtaRecord.patch_data`, the partial-update view of a record:
  only the fields the incoming payload actually carried.
"""

from __future__ import annotations

from typing import Any, TypeAlias, TypeVar

from pydantic import BaseModel, ConfigDict

RecordId: TypeAlias = int | str

TRecord = TypeVar("TRecord", bound="GtaRecord")


class GtaRecord(BaseModel):
    """Base for every record kind held by the store."""

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
    )

    def patch_data(self) -> dict[str, Any]:
        """Return the fields explicitly supplied for this record.

        Declared fields left at their defaults are not part of the patch,
        so merging a partial payload never resets values already held.
        """
        patch = {name: getattr(self, name) for name in self.model_fields_set if name in type(self).model_fields}
        if self.model_extra:
            patch.update(self.model_extra)
        return patch


def coerce_record(model: type[TRecord], value: Any) -> TRecord:
    """Return *value* as an instance of *model*.

    Instances are returned untouched (identity is kept); mappings are
    validated into a new instance.
    """
    if isinstance(value, model):
        return value
    return model.model_validate(value)
