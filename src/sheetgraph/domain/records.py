"""Input record model — one entry of a solution export.

The export is a JSON array of entries shaped like::

    {
      "uuid": "…",
      "id": 24811,
      "parentId": 24100,
      "name": "12.3 Revenue",
      "typeName": "MeasureSheet",
      "isFolder": false,
      "directReferences": [{"id": 24790, "typeName": "MeasureSheet", "dependencyType": [1]}],
      "SORT_ORDER": 4
    }

Scalars are validated strictly: a missing required key, or a string where
an integer is expected, rejects the whole document.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, field_validator


class Reference(BaseModel):
    """A declared link from a record to another entity."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: StrictInt
    type_name: StrictStr = Field(alias="typeName")
    # Relation kinds are carried through but never interpreted.
    dependency_types: tuple[StrictInt, ...] = Field(alias="dependencyType", default=())

    @field_validator("dependency_types", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return () if value is None else value


class Record(BaseModel):
    """One exported entity and the references it declares."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: StrictInt
    parent_id: StrictInt = Field(alias="parentId")
    name: StrictStr
    type_name: StrictStr = Field(alias="typeName")
    is_folder: StrictBool = Field(alias="isFolder")
    references: tuple[Reference, ...] = Field(alias="directReferences")
    sort_order: StrictInt = Field(alias="SORT_ORDER", default=0)
    uuid: StrictStr | None = None

    @field_validator("references", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        # Some exporters write an empty list as null.
        return () if value is None else value
