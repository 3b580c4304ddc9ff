"""Per-user search session state."""

from __future__ import annotations

from dataclasses import dataclass

from .models import PresentationModel
from .registry import CategoryId, definition_for


@dataclass
class LookupSession:
    """Current category plus the outcome of the last completed search."""

    category: CategoryId = CategoryId.MOBILE
    default_category: CategoryId = CategoryId.MOBILE
    chained_id: str | None = None
    location_hint: str | None = None
    result: PresentationModel | None = None

    def select_category(self, category: CategoryId | str) -> None:
        """Switch category and discard the previous result."""

        self.category = definition_for(category).id
        self.clear_result()

    def clear_result(self) -> None:
        self.chained_id = None
        self.location_hint = None
        self.result = None

    def reset(self) -> None:
        """Return the session to its initial empty form on the default category."""

        self.category = self.default_category
        self.clear_result()

    def record(self, model: PresentationModel) -> None:
        self.result = model
        self.chained_id = model.chained_id
        self.location_hint = model.location_hint
