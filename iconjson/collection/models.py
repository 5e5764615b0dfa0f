from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Keys of the structured (JSON) form that are not root default values.
STRUCTURE_KEYS = {"prefix", "icons", "aliases", "chars", "not_found"}

# Attributes combined (not overridden) when an alias is merged with its parent.
TRANSFORM_KEYS = ("rotate", "hFlip", "vFlip")

Number = int | float


class IconAttributes(BaseModel):
    """Optional geometry/orientation fields shared by icons and aliases.

    Field names are snake_case; the JSON keys (``hFlip``, ``inlineTop``...) are
    aliases. Absent fields stay ``None`` and are dropped by :meth:`as_json`.
    Unknown keys are kept so an exported set matches what was loaded.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    body: str | None = None
    left: Number | None = None
    top: Number | None = None
    width: Number | None = None
    height: Number | None = None
    inline_width: Number | None = Field(default=None, alias="inlineWidth")
    inline_height: Number | None = Field(default=None, alias="inlineHeight")
    inline_top: Number | None = Field(default=None, alias="inlineTop")
    rotate: int | None = None
    h_flip: bool | None = Field(default=None, alias="hFlip")
    v_flip: bool | None = Field(default=None, alias="vFlip")
    vertical_align: Number | None = Field(default=None, alias="verticalAlign")

    def as_json(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class IconRecord(IconAttributes):
    """One icon as stored in a set: ``body`` is required."""

    body: str


class AliasRecord(IconAttributes):
    """Alias of another icon or alias; own attributes are merged at resolution time."""

    parent: str

    @field_validator("parent")
    @classmethod
    def validate_parent(cls, value: str) -> str:
        if not value:
            raise ValueError("parent must not be empty")
        return value


class IconData(BaseModel):
    """Fully normalized icon, ready for rendering."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    body: str = ""
    left: Number
    top: Number
    width: Number
    height: Number
    inline_height: Number = Field(alias="inlineHeight")
    inline_top: Number = Field(alias="inlineTop")
    rotate: int
    h_flip: bool = Field(alias="hFlip")
    v_flip: bool = Field(alias="vFlip")
    vertical_align: Number = Field(alias="verticalAlign")

    def as_json(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class Selection(BaseModel):
    """Result of :meth:`IconSet.select`: a minimal structured set plus unresolved names."""

    data: dict[str, Any]
    missing: list[str] = Field(default_factory=list)
