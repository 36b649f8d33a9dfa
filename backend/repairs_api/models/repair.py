"""
Repairs API — Repair Record Model
==================================

What:  The stored representation of one repair.
How:   A pydantic model; the store keeps instances of it and replaces them with
       merged copies on update (`model_copy(update=...)`).
Who:   Owned by RepairStore; the routes use it directly as their response model.

Field names are snake_case in Python and camelCase on the wire
(`assigned_to` ↔ `assignedTo`), matching the JSON the service has always spoken.
Everything except `id` is optional at the storage layer; the create contract
(schemas.repair.RepairCreate) is what makes them required.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Python attribute names that callers may change; `id` is never one of them
MUTABLE_FIELDS = ("title", "description", "assigned_to", "date", "image")


class Repair(BaseModel):
    """A single repair record held by the store."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(gt=0)
    title: Optional[str] = None
    description: Optional[str] = None
    assigned_to: Optional[str] = Field(default=None, alias="assignedTo")
    date: Optional[str] = None
    image: Optional[str] = None
