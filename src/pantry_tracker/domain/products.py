"""Domain models for the product catalog."""

from dataclasses import dataclass, field
from uuid import UUID

NUTRITION_FIELDS = (
    "calories_per_100g",
    "protein_per_100g",
    "carbs_per_100g",
    "fats_per_100g",
    "fiber_per_100g",
    "sugar_per_100g",
    "sodium_per_100g",
)

DIETARY_FLAGS = (
    "is_halal",
    "is_vegan",
    "is_vegetarian",
    "is_kosher",
    "is_gluten_free",
    "is_dairy_free",
    "is_nut_free",
    "is_soy_free",
    "is_shellfish_free",
    "is_egg_free",
    "is_fish_free",
    "is_palm_oil_free",
)

# Older catalog imports store these columns instead of the primary ones.
LEGACY_NUTRITION_COLUMNS = {
    "calories_per_100g": "energy_kcal_100g",
    "carbs_per_100g": "carbohydrates_100g",
}


@dataclass(frozen=True)
class Product:
    """Represents a catalog entry with per-100g nutrition."""

    id: str
    name: str | None
    brand: str | None = None
    description: str | None = None
    category: str | None = None
    nutrition: dict[str, float | None] = field(default_factory=dict)
    flags: dict[str, bool | None] = field(default_factory=dict)
    is_active: bool = True

    def catalog_nutrition(self) -> dict[str, float | None]:
        """Return nutrition values with legacy columns filled in."""
        values = {name: self.nutrition.get(name) for name in NUTRITION_FIELDS}
        for primary, legacy in LEGACY_NUTRITION_COLUMNS.items():
            if values[primary] is None:
                values[primary] = self.nutrition.get(legacy)
        return values


@dataclass(frozen=True)
class ProductPage:
    """A page of catalog results."""

    items: list[Product]
    total: int
    limit: int
    offset: int


def placeholder_product(product_id: str) -> Product:
    """Stand-in for a pantry row whose product is missing from the catalog."""
    return Product(
        id=product_id,
        name="Unknown",
        category="Unknown",
        nutrition={name: 0 for name in NUTRITION_FIELDS},
    )


def is_product_id(value: object) -> bool:
    """Return true when the value is a catalog product id (a UUID)."""
    if not isinstance(value, str):
        return False
    try:
        UUID(value)
    except ValueError:
        return False
    return True
