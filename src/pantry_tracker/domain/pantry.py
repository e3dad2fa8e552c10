"""Domain models and merge rules for user pantries."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime

from pantry_tracker.domain.products import (
    DIETARY_FLAGS,
    NUTRITION_FIELDS,
    Product,
    placeholder_product,
)

NUTRITION_DEFAULTS: dict[str, object] = {name: 0 for name in NUTRITION_FIELDS}
FLAG_DEFAULTS: dict[str, object] = {name: False for name in DIETARY_FLAGS}
UNKNOWN = "Unknown"

DEFAULT_QUANTITY = 1
DEFAULT_UNIT = "servings"


@dataclass(frozen=True)
class PantryRow:
    """A stored pantry row with its optional per-item overrides."""

    user_id: str
    product_id: str
    quantity: float
    unit: str | None
    quantity_in_grams: float | None
    overrides: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class PantryItemInput:
    """Parsed payload of an add-to-pantry request."""

    product_id: str
    quantity: float = DEFAULT_QUANTITY
    unit: str = DEFAULT_UNIT
    quantity_in_grams: float | None = None
    name: str | None = None
    brand: str | None = None
    description: str | None = None
    category: str | None = None
    nutrition: dict[str, float | None] = field(default_factory=dict)
    flags: dict[str, bool | None] = field(default_factory=dict)

    def overrides(self) -> dict[str, object]:
        """Return the full override record, with omitted fields as None."""
        values: dict[str, object] = {
            name: self.nutrition.get(name) for name in NUTRITION_FIELDS
        }
        values.update({name: self.flags.get(name) for name in DIETARY_FLAGS})
        return values


@dataclass(frozen=True)
class PantryEntry:
    """Denormalized pantry record ready for display."""

    id: str
    name: str
    category: str
    description: str | None
    quantity: float
    unit: str | None
    quantity_in_grams: float | None
    nutrition: dict[str, object]
    flags: dict[str, object]
    added_at: datetime


def merge_fields(
    overrides: Mapping[str, object],
    fallback: Mapping[str, object],
    defaults: Mapping[str, object],
) -> dict[str, object]:
    """Resolve each default key as override, then fallback, then default.

    ``None`` and missing keys fall through; ``0`` and ``False`` do not.
    """
    merged: dict[str, object] = {}
    for key, default in defaults.items():
        value = overrides.get(key)
        if value is None:
            value = fallback.get(key)
        if value is None:
            value = default
        merged[key] = value
    return merged


def build_pantry_entry(
    row: PantryRow, product: Product | None, as_of: datetime
) -> PantryEntry:
    """Merge a pantry row with its catalog product into a display record."""
    catalog = product or placeholder_product(row.product_id)
    return PantryEntry(
        id=row.product_id,
        name=catalog.name or UNKNOWN,
        category=catalog.category or UNKNOWN,
        description=catalog.description,
        quantity=row.quantity,
        unit=row.unit,
        quantity_in_grams=row.quantity_in_grams,
        nutrition=merge_fields(
            row.overrides, catalog.catalog_nutrition(), NUTRITION_DEFAULTS
        ),
        flags=merge_fields(row.overrides, catalog.flags, FLAG_DEFAULTS),
        added_at=as_of,
    )
