"""FastAPI router exposing identifier lookups."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from infofinder.lookup import (
    CategoryDescriptor,
    CategoryId,
    InputValidationError,
    LookupService,
    LookupServiceError,
    LookupTransportError,
    PresentationModel,
    Section,
    definition_for,
    list_categories,
)
from infofinder.lookup.validator import Invalid, validate

router = APIRouter(prefix="/lookup", tags=["lookup"])
LOGGER = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_lookup_service() -> LookupService:
    """Dependency provider returning the shared LookupService instance."""

    return LookupService()


def _lookup_http_error(exc: LookupServiceError) -> HTTPException:
    if isinstance(exc, LookupTransportError):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.user_message)
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.user_message)


def _validation_detail(exc: InputValidationError) -> dict[str, str]:
    return {"reason": exc.reason, "message": str(exc)}


@router.get("/categories", response_model=List[CategoryDescriptor])
def categories() -> List[CategoryDescriptor]:
    """List the supported identifier categories with their input hints."""

    return [
        CategoryDescriptor(
            id=definition.id,
            label=definition.label,
            icon=definition.icon,
            placeholder=definition.placeholder,
            hint=definition.hint,
            max_length=definition.max_length,
        )
        for definition in list_categories()
    ]


@router.get("/search/{category}", response_model=PresentationModel)
def search(
    category: str,
    value: str = Query("", description="Raw identifier as typed by the user."),
    service: LookupService = Depends(get_lookup_service),
) -> PresentationModel:
    """Validate ``value`` for ``category``, query the upstream service, and normalize the reply."""

    try:
        definition = definition_for(category)
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown category: {category}") from exc

    try:
        return service.lookup(definition.id, value)
    except InputValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=_validation_detail(exc)) from exc
    except LookupServiceError as exc:
        LOGGER.info("Lookup for %s returned no result: %s", definition.id.value, exc)
        raise _lookup_http_error(exc) from exc


@router.get("/chained/{chained_id}", response_model=Section)
def chained(
    chained_id: str,
    service: LookupService = Depends(get_lookup_service),
) -> Section:
    """Fetch the Aadhaar details section for an id discovered in a mobile search."""

    result = validate(CategoryId.NATIONAL_ID, chained_id)
    if isinstance(result, Invalid):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=_validation_detail(InputValidationError(result)),
        )
    try:
        return service.chained_section(result.value)
    except LookupServiceError as exc:
        LOGGER.info("Chained lookup returned no result: %s", exc)
        raise _lookup_http_error(exc) from exc


__all__ = ["router", "get_lookup_service"]
