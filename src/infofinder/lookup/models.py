"""Pydantic models describing normalized lookup results."""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field

from .registry import CategoryId


class InfoItem(BaseModel):
    """Single labeled value shown inside a section."""

    label: str
    value: str


class Section(BaseModel):
    """Titled, icon-tagged group of info items."""

    title: str
    icon: str
    items: List[InfoItem] = Field(default_factory=list)

    @property
    def heading(self) -> str:
        return f"{self.icon} {self.title}"


class NormalizedRecord(BaseModel):
    """Canonical view of an effective record.

    Known fields hold display-ready strings; every other present key lands in
    ``additional`` under its original name.
    """

    name: str | None = None
    fname: str | None = None
    mobile: str | None = None
    id: str | None = None
    address: str | None = None
    circle: str | None = None
    city: str | None = None
    state: str | None = None
    additional: Dict[str, Any] = Field(default_factory=dict)


class PresentationModel(BaseModel):
    """Ordered sections plus the derived chaining and map hints."""

    category: CategoryId
    search_value: str
    sections: List[Section] = Field(default_factory=list)
    chained_id: str | None = None
    location_hint: str | None = None

    @property
    def has_chained_lookup(self) -> bool:
        return bool(self.chained_id)


class CategoryDescriptor(BaseModel):
    """Public description of a category for API clients."""

    id: CategoryId
    label: str
    icon: str
    placeholder: str
    hint: str
    max_length: int
