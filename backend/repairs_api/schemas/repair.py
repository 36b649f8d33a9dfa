"""
Repairs API — Pydantic Request/Response Schemas
================================================

What:  Pydantic models defining the API contract for repairs.
How:   The validation module runs request bodies through RepairCreate /
       RepairUpdate; the routes reference every model here so FastAPI can
       render them in the generated OpenAPI document.

The stored record itself (models.repair.Repair) doubles as the response model
for single repairs and repair lists.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what clients send
# ══════════════════════════════════════════════════════════════════════════


class RepairCreate(BaseModel):
    """
    What:  Body of POST /repairs.
    Every field is required; the id is assigned by the store and must not be sent.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str = Field(description="Short name of the repair", examples=["Oil change"])
    description: str = Field(description="What needs to be done")
    assigned_to: str = Field(
        alias="assignedTo",
        description="Person the repair is assigned to",
        examples=["Karin Blair"],
    )
    date: str = Field(description="Scheduled date", examples=["2023-05-23"])
    image: str = Field(description="URL of an illustrative image")


class RepairUpdate(BaseModel):
    """
    What:  Body of PATCH /repairs/{id}.

    Every field is optional. Only keys present in the JSON are applied, which is
    read back through `model_dump(exclude_unset=True)`. A key sent as null or ""
    clears the stored value; a key left out keeps it.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: Optional[str] = None
    description: Optional[str] = None
    assigned_to: Optional[str] = Field(default=None, alias="assignedTo")
    date: Optional[str] = None
    image: Optional[str] = None

    def changes(self) -> dict:
        """Supplied fields only, keyed by Python attribute name."""
        return self.model_dump(exclude_unset=True)


class LegacyRepairUpdate(RepairUpdate):
    """Body of the legacy PATCH /repairs route: a partial update plus its target id."""

    id: int = Field(description="Id of the repair to update", examples=[3])


class RepairIdBody(BaseModel):
    """Body of the legacy DELETE /repairs route (id travels in the body)."""

    id: int = Field(description="Id of the repair", examples=[3])


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class MessageResponse(BaseModel):
    message: str = Field(description="Human-readable confirmation")


class ErrorResponse(BaseModel):
    """
    What:  Error body returned for every failed request.

    Example:
        {"error": "Repair not found"}
    """

    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    repairs: int = Field(description="Number of live repairs in the store")
    uptime_seconds: float = Field(description="Seconds since service started")
