"""Response normalization for lookup replies.

Upstream services answer in one of three shapes: a bare object, a bare array,
or an object wrapping either under ``data``. This module resolves the shape to
a single effective record, maps it onto a canonical record, and groups the
fields into display sections. Normalization is total: sparse or malformed
payloads produce fewer items, never an exception.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Sequence, Tuple

from .models import InfoItem, NormalizedRecord, PresentationModel, Section
from .registry import CategoryId, definition_for

_MISSING_MARKERS = frozenset({"null", "undefined"})
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_KEY_SEPARATORS = re.compile(r"[_\-]+")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class _SectionSpec:
    title: str
    icon: str
    fields: Tuple[Tuple[str, str], ...]


PERSONAL = _SectionSpec(
    title="Personal Information",
    icon="👤",
    fields=(("name", "Name"), ("fname", "Father's Name"), ("mobile", "Mobile Number"), ("id", "Aadhaar ID")),
)
LOCATION = _SectionSpec(
    title="Location Details",
    icon="📍",
    fields=(("circle", "Service Circle"), ("address", "Address"), ("city", "City"), ("state", "State")),
)
CHAINED = _SectionSpec(
    title="Aadhaar Details",
    icon="🆔",
    fields=(
        ("name", "Name"),
        ("fname", "Father's Name"),
        ("address", "Address"),
        ("dob", "Date of Birth"),
        ("gender", "Gender"),
    ),
)
ADDITIONAL_TITLE, ADDITIONAL_ICON = "Additional Information", "📊"
FALLBACK_TITLE, FALLBACK_ICON = "Information", "📄"

KNOWN_FIELDS = tuple(name for name, _ in PERSONAL.fields + LOCATION.fields)


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------


def is_present(value: Any) -> bool:
    """Return True for truthy values other than the literal ``"null"``/``"undefined"`` strings."""

    if isinstance(value, str) and value.strip() in _MISSING_MARKERS:
        return False
    return bool(value)


def display_value(value: Any) -> str:
    """Render a JSON value as display text."""

    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def format_address(address: Any) -> str:
    """Turn ``!``-separated upstream addresses into comma-separated text."""

    if not is_present(address):
        return "-"
    text = display_value(address).replace("!", ", ")
    return _WHITESPACE.sub(" ", text).strip()


def format_key(key: Any) -> str:
    """Convert compact keys (``registeredState``, ``father_name``) into spaced, capitalized labels."""

    spaced = _KEY_SEPARATORS.sub(" ", _CAMEL_BOUNDARY.sub(" ", str(key)))
    return " ".join(word[:1].upper() + word[1:] for word in spaced.split())


# ---------------------------------------------------------------------------
# Shape resolution
# ---------------------------------------------------------------------------


def _first_or_self(items: Sequence[Any]) -> Any:
    if items and is_present(items[0]):
        return items[0]
    return items


def _has_list_data(payload: Any) -> bool:
    return isinstance(payload, Mapping) and isinstance(payload.get("data"), list)


def _has_object_data(payload: Any) -> bool:
    return isinstance(payload, Mapping) and bool(payload.get("data")) and not isinstance(payload.get("data"), list)


_UNWRAP_RULES: Tuple[Tuple[Callable[[Any], bool], Callable[[Any], Any]], ...] = (
    (lambda payload: isinstance(payload, list), _first_or_self),
    (_has_list_data, lambda payload: _first_or_self(payload["data"])),
    (_has_object_data, lambda payload: payload["data"]),
)


def unwrap(payload: Any) -> Any:
    """Resolve the effective record from a bare object, bare array, or ``data`` envelope."""

    for matches, resolve in _UNWRAP_RULES:
        if matches(payload):
            return resolve(payload)
    return payload


def _as_mapping(record: Any) -> Dict[str, Any] | None:
    if isinstance(record, Mapping):
        return {str(key): value for key, value in record.items()}
    if isinstance(record, list):
        return {str(index): value for index, value in enumerate(record)}
    return None


# ---------------------------------------------------------------------------
# Canonical record + sections
# ---------------------------------------------------------------------------


def to_record(record: Any) -> NormalizedRecord:
    """Map an effective record onto :class:`NormalizedRecord`."""

    mapping = _as_mapping(record) or {}
    known: Dict[str, str] = {}
    additional: Dict[str, Any] = {}
    for key, value in mapping.items():
        if not is_present(value):
            continue
        if key in KNOWN_FIELDS:
            known[key] = format_address(value) if key == "address" else display_value(value)
        else:
            additional[key] = value
    return NormalizedRecord(**known, additional=additional)


def _items_for(spec: _SectionSpec, values: Mapping[str, Any]) -> List[InfoItem]:
    items: List[InfoItem] = []
    for field_name, label in spec.fields:
        value = values.get(field_name)
        if not is_present(value):
            continue
        text = format_address(value) if field_name == "address" else display_value(value)
        items.append(InfoItem(label=label, value=text))
    return items


def _build_sections(category: CategoryId, search_value: str, record: NormalizedRecord) -> List[Section]:
    known = record.model_dump(exclude={"additional"})
    sections: List[Section] = []

    personal = _items_for(PERSONAL, known)
    if personal:
        if search_value and category is not CategoryId.MOBILE:
            personal.append(InfoItem(label="Search Value", value=search_value))
        sections.append(Section(title=PERSONAL.title, icon=PERSONAL.icon, items=personal))

    location = _items_for(LOCATION, known)
    if location:
        sections.append(Section(title=LOCATION.title, icon=LOCATION.icon, items=location))

    additional = [InfoItem(label=format_key(key), value=display_value(value)) for key, value in record.additional.items()]
    if additional:
        sections.append(Section(title=ADDITIONAL_TITLE, icon=ADDITIONAL_ICON, items=additional))
    return sections


def _fallback_section(record: Any) -> Section:
    mapping = _as_mapping(record)
    if not mapping:
        items = [InfoItem(label="Value", value=display_value(record) if is_present(record) else "-")]
    else:
        items = [
            InfoItem(label=format_key(key), value=display_value(value) if is_present(value) else "-")
            for key, value in mapping.items()
        ]
    return Section(title=FALLBACK_TITLE, icon=FALLBACK_ICON, items=items)


def normalize(category_id: CategoryId | str, search_value: str, raw_response: Any) -> PresentationModel:
    """Build the presentation model for a lookup reply.

    Args:
        category_id: Category the search ran under.
        search_value: Validated input that produced the reply.
        raw_response: Decoded JSON reply in any of the supported shapes.

    Returns:
        PresentationModel with at least one section.
    """

    category = definition_for(category_id).id
    record = unwrap(raw_response)
    mapping = _as_mapping(record) or {}
    canonical = to_record(record)

    sections = _build_sections(category, search_value, canonical)
    if not sections:
        sections = [_fallback_section(record)]

    chained_id = None
    if category is CategoryId.MOBILE and is_present(mapping.get("id")):
        chained_id = display_value(mapping["id"])

    return PresentationModel(
        category=category,
        search_value=search_value,
        sections=sections,
        chained_id=chained_id,
        location_hint=canonical.address,
    )


def build_chained_section(chained_id: str, raw_response: Any) -> Section:
    """Build the Aadhaar details section appended after a chained lookup."""

    mapping = _as_mapping(unwrap(raw_response)) or {}
    items = [InfoItem(label="Aadhaar Number", value=chained_id)]
    items.extend(_items_for(CHAINED, mapping))
    return Section(title=CHAINED.title, icon=CHAINED.icon, items=items)


__all__ = [
    "KNOWN_FIELDS",
    "build_chained_section",
    "display_value",
    "format_address",
    "format_key",
    "is_present",
    "normalize",
    "to_record",
    "unwrap",
]
