"""High-level orchestration for identifier lookups."""

from __future__ import annotations

import logging

from infofinder.observability import Observability, get_observability
from infofinder.settings import Settings, get_settings

from .client import LookupClient
from .errors import InputValidationError, LookupServiceError, NoChainedLookupError
from .models import PresentationModel, Section
from .normalizer import build_chained_section, normalize
from .registry import CategoryId, definition_for
from .session import LookupSession
from .validator import Invalid, validate

LOGGER = logging.getLogger(__name__)


class LookupService:
    """Coordinates validation, fetching, and normalization for a session."""

    def __init__(
        self,
        *,
        client: LookupClient | None = None,
        settings: Settings | None = None,
        observability: Observability | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._owns_client = client is None
        self.client = client or LookupClient(settings=self.settings)
        self.observability = observability or get_observability(component="lookup_service", settings=self.settings)

    def __enter__(self) -> "LookupService":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def new_session(self) -> LookupSession:
        """Create a session starting on the configured default category."""

        session = LookupSession()
        try:
            session.default_category = definition_for(self.settings.lookup.default_category).id
        except KeyError:
            LOGGER.warning("Ignoring unknown default category %r", self.settings.lookup.default_category)
        session.reset()
        return session

    def lookup(self, category: CategoryId | str, raw_input: str | None) -> PresentationModel:
        """Validate, fetch, and normalize without touching any session."""

        result = validate(category, raw_input)
        if isinstance(result, Invalid):
            raise InputValidationError(result)
        payload = self.client.fetch(category, result.value)
        return normalize(category, result.value, payload)

    def search(
        self,
        session: LookupSession,
        raw_input: str | None,
        *,
        category: CategoryId | str | None = None,
    ) -> PresentationModel:
        """Run a primary search and record its outcome on ``session``.

        Raises:
            InputValidationError: Input failed the category grammar.
            LookupServiceError: The lookup failed; the session keeps its previous result.
        """

        if category is not None:
            session.select_category(category)
        active = session.category
        try:
            model = self.lookup(active, raw_input)
        except InputValidationError as exc:
            self.observability.emit_event("search.rejected", category=active.value, reason=exc.reason)
            raise
        except LookupServiceError as exc:
            LOGGER.warning("Search failed for category %s: %s", active.value, exc)
            self.observability.emit_event("search.failed", category=active.value, error=exc.__class__.__name__)
            raise

        session.record(model)
        self.observability.emit_event(
            "search.completed",
            category=active.value,
            sections=len(model.sections),
            chained=model.has_chained_lookup,
        )
        return model

    def chained_section(self, chained_id: str) -> Section:
        """Fetch the national-id record for ``chained_id`` and build its section."""

        payload = self.client.fetch(CategoryId.NATIONAL_ID, chained_id)
        return build_chained_section(chained_id, payload)

    def fetch_chained(self, session: LookupSession) -> Section:
        """Append the chained Aadhaar section to the session result and retire the trigger."""

        chained_id = session.chained_id
        if not chained_id or session.result is None:
            raise NoChainedLookupError()
        try:
            section = self.chained_section(chained_id)
        except LookupServiceError as exc:
            LOGGER.warning("Chained lookup failed: %s", exc)
            self.observability.emit_event("chained.failed", error=exc.__class__.__name__)
            raise

        updated = session.result.model_copy(
            update={"sections": [*session.result.sections, section], "chained_id": None}
        )
        session.result = updated
        session.chained_id = None
        self.observability.emit_event("chained.completed", items=len(section.items))
        return section
