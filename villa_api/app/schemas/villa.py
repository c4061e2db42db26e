"""
Pydantic models for villa data.

``VillaBase`` holds the fields shared by every representation.
``VillaCreate`` is the full payload accepted by create and replace; its
``id`` defaults to ``0`` because the server assigns ids on create.
``VillaRead`` is the response model.  ``VillaPatch`` and
``JsonPatchOperation`` are the two accepted forms of a partial update,
and ``VillaUpdate`` validates the record that results from applying
either of them.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


NAME_MAX_LENGTH = 30


def _reject_blank(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        raise ValueError("Name must not be blank")
    return value


class VillaBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH, examples=["Pool View"])
    sqft: int = Field(..., ge=0, examples=[100])
    occupancy: int = Field(..., gt=0, examples=[4])

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _reject_blank(v)


class VillaCreate(VillaBase):
    """Payload for creating or replacing a villa.

    On create ``id`` must be left out or set to ``0``.  On replace it
    must repeat the id from the URL.
    """

    id: int = Field(0, examples=[0])


class VillaRead(VillaBase):
    """Schema for reading a villa from the API."""

    id: int

    model_config = ConfigDict(from_attributes=True)


class VillaUpdate(VillaBase):
    """A complete villa after a partial update has been applied.

    Unknown keys are rejected so a JSON Patch ``add`` on an arbitrary
    path does not slip through.
    """

    id: int

    model_config = ConfigDict(extra="forbid")


class VillaPatch(BaseModel):
    """Partial update naming only the fields to change.

    All fields are optional; an empty object is a no‑op.
    """

    id: Optional[int] = None
    name: Optional[str] = Field(None, max_length=NAME_MAX_LENGTH)
    sqft: Optional[int] = Field(None, ge=0)
    occupancy: Optional[int] = Field(None, gt=0)

    model_config = ConfigDict(extra="forbid")


class JsonPatchOperation(BaseModel):
    """A single RFC 6902 JSON Patch operation."""

    op: Literal["add", "remove", "replace", "move", "copy", "test"]
    path: str = Field(..., examples=["/name"])
    value: Any = None
    from_: Optional[str] = Field(None, alias="from")

    model_config = ConfigDict(populate_by_name=True)
