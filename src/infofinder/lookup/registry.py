"""Category catalog and helper accessors."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable

_PRIMARY_LOOKUP_HOST = "https://ox.taitaninfo.workers.dev/"
_IFSC_LOOKUP_HOST = "https://ifsc.taitaninfo.workers.dev/"


class CategoryId(str, Enum):
    """Supported identifier categories."""

    MOBILE = "mobile"
    NATIONAL_ID = "national_id"
    VEHICLE = "vehicle"
    FAMILY = "family"
    BANK_CODE = "bank_code"


@dataclass(frozen=True)
class CategoryDefinition:
    """Grammar, endpoint, and display metadata for one identifier category."""

    id: CategoryId
    label: str
    icon: str
    placeholder: str
    hint: str
    max_length: int
    pattern: re.Pattern[str]
    endpoint: str
    query_param: str

    @property
    def display_name(self) -> str:
        """Title-cased label used in headings (for example ``Mobile Number``)."""

        return " ".join(word[:1].upper() + word[1:] for word in self.label.split())

    def matches(self, value: str) -> bool:
        """Return True when ``value`` satisfies the category grammar in full."""

        return self.pattern.fullmatch(value) is not None


_DEFAULT_CATEGORIES: Dict[CategoryId, CategoryDefinition] = {
    CategoryId.MOBILE: CategoryDefinition(
        id=CategoryId.MOBILE,
        label="mobile number",
        icon="📱",
        placeholder="Enter mobile number (e.g., 9876543210)",
        hint="Enter 10-digit mobile number",
        max_length=10,
        pattern=re.compile(r"[0-9]{10}"),
        endpoint=_PRIMARY_LOOKUP_HOST,
        query_param="mobile",
    ),
    CategoryId.NATIONAL_ID: CategoryDefinition(
        id=CategoryId.NATIONAL_ID,
        label="Aadhaar number",
        icon="🆔",
        placeholder="Enter Aadhaar number (e.g., 123456789012)",
        hint="Enter 12-digit Aadhaar number",
        max_length=12,
        pattern=re.compile(r"[0-9]{12}"),
        endpoint=_PRIMARY_LOOKUP_HOST,
        query_param="aadhar",
    ),
    CategoryId.VEHICLE: CategoryDefinition(
        id=CategoryId.VEHICLE,
        label="vehicle number",
        icon="🚗",
        placeholder="Enter vehicle number (e.g., UP15AB1234)",
        hint="Enter vehicle registration number",
        max_length=20,
        pattern=re.compile(r"[A-Z]{2}[0-9]{1,2}[A-Z]{1,2}[0-9]{1,4}", re.IGNORECASE),
        endpoint=_PRIMARY_LOOKUP_HOST,
        query_param="vehicle",
    ),
    CategoryId.FAMILY: CategoryDefinition(
        id=CategoryId.FAMILY,
        label="family identifier",
        icon="👨‍👩‍👧‍👦",
        placeholder="Enter family name or identifier",
        hint="Enter family name or identifier",
        max_length=50,
        pattern=re.compile(r".+", re.DOTALL),
        endpoint=_PRIMARY_LOOKUP_HOST,
        query_param="family",
    ),
    CategoryId.BANK_CODE: CategoryDefinition(
        id=CategoryId.BANK_CODE,
        label="IFSC code",
        icon="🏦",
        placeholder="Enter IFSC code (e.g., SBIN0000001)",
        hint="Enter 11-character IFSC code",
        max_length=11,
        pattern=re.compile(r"[A-Z]{4}0[A-Z0-9]{6}"),
        endpoint=_IFSC_LOOKUP_HOST,
        query_param="code",
    ),
}


def list_categories() -> Iterable[CategoryDefinition]:
    """Return every category definition in display order."""

    return list(_DEFAULT_CATEGORIES.values())


def definition_for(category_id: CategoryId | str) -> CategoryDefinition:
    """Fetch a category definition by id.

    Args:
        category_id: Category enum member or its string value.

    Returns:
        CategoryDefinition registered for the id.

    Raises:
        KeyError: If the id is not a registered category.
    """

    try:
        key = CategoryId(category_id)
    except ValueError:
        raise KeyError(f"Unknown lookup category: {category_id}") from None
    return _DEFAULT_CATEGORIES[key]
