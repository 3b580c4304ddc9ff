"""Identifier lookup primitives."""

from .client import LookupClient, LookupRequest
from .errors import (
    EmptyLookupError,
    InputValidationError,
    LookupHTTPError,
    LookupServiceError,
    LookupTransportError,
    NoChainedLookupError,
)
from .models import CategoryDescriptor, InfoItem, NormalizedRecord, PresentationModel, Section
from .normalizer import build_chained_section, format_address, format_key, normalize, to_record, unwrap
from .registry import CategoryDefinition, CategoryId, definition_for, list_categories
from .service import LookupService
from .session import LookupSession
from .validator import Invalid, Valid, ValidationFailure, ValidationResult, validate

__all__ = [
    "CategoryDefinition",
    "CategoryDescriptor",
    "CategoryId",
    "EmptyLookupError",
    "InfoItem",
    "InputValidationError",
    "Invalid",
    "LookupClient",
    "LookupHTTPError",
    "LookupRequest",
    "LookupService",
    "LookupServiceError",
    "LookupSession",
    "LookupTransportError",
    "NoChainedLookupError",
    "NormalizedRecord",
    "PresentationModel",
    "Section",
    "Valid",
    "ValidationFailure",
    "ValidationResult",
    "build_chained_section",
    "definition_for",
    "format_address",
    "format_key",
    "list_categories",
    "normalize",
    "to_record",
    "unwrap",
    "validate",
]
