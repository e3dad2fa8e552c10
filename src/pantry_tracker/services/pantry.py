"""Pantry reconciliation service."""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from pantry_tracker.domain.pantry import (
    DEFAULT_QUANTITY,
    DEFAULT_UNIT,
    PantryEntry,
    PantryItemInput,
    PantryRow,
    build_pantry_entry,
)
from pantry_tracker.domain.products import (
    DIETARY_FLAGS,
    NUTRITION_FIELDS,
    is_product_id,
)
from pantry_tracker.errors import MissingParameter
from pantry_tracker.services.products import ProductService
from pantry_tracker.services.users import UserService

logger = logging.getLogger(__name__)

# Short keys accepted from clients in place of the per-100g columns.
NUTRITION_ALIASES = {
    "calories_per_100g": "calories",
    "protein_per_100g": "protein",
    "carbs_per_100g": "carbs",
    "fats_per_100g": "fat",
}


class PantryRepository(Protocol):
    """Persistence interface for user pantry rows."""

    def list_items(self, user_id: str) -> list[PantryRow]:
        """Return every pantry row for a user."""

    def add_quantity(  # noqa: PLR0913
        self,
        user_id: str,
        product_id: str,
        quantity: float,
        unit: str,
        quantity_in_grams: float | None,
        overrides: dict[str, object],
    ) -> None:
        """Create the row or increment its quantity, replacing the overrides."""

    def set_quantity(self, user_id: str, product_id: str, quantity: float) -> None:
        """Replace the quantity of an existing row."""

    def delete_item(self, user_id: str, product_id: str) -> None:
        """Delete one pantry row."""

    def delete_all(self, user_id: str) -> None:
        """Delete every pantry row of a user."""


@dataclass
class PantryService:
    """Application service for pantry reads and mutations.

    Every mutation answers with the refreshed pantry of the user.
    """

    repository: PantryRepository
    product_service: ProductService
    user_service: UserService

    def list_pantry(self, user_id: str | None) -> list[PantryEntry]:
        """Return the merged display records of a user's pantry."""
        resolved_user = _require(user_id, "userId")
        rows = self.repository.list_items(resolved_user)
        products = self.product_service.resolve(row.product_id for row in rows)
        product_by_id = {product.id: product for product in products}
        as_of = datetime.now(tz=UTC)
        return [
            build_pantry_entry(row, product_by_id.get(row.product_id), as_of)
            for row in rows
        ]

    def add_item(
        self, user_id: str | None, payload: Mapping[str, object] | None
    ) -> list[PantryEntry]:
        """Add a product to the pantry, accumulating quantity on repeat adds."""
        resolved_user = _require(user_id, "userId")
        item = parse_pantry_item(payload)
        self.user_service.ensure_shadow_user(resolved_user)
        product_id = self.product_service.ensure_product(item)
        self.repository.add_quantity(
            user_id=resolved_user,
            product_id=product_id,
            quantity=item.quantity,
            unit=item.unit,
            quantity_in_grams=item.quantity_in_grams,
            overrides=item.overrides(),
        )
        logger.info(
            "Added pantry item",
            extra={"user_id": resolved_user, "product_id": product_id},
        )
        return self.list_pantry(resolved_user)

    def update_quantity(
        self, user_id: str | None, product_id: str | None, quantity: object
    ) -> list[PantryEntry]:
        """Replace a row's quantity; zero or less removes the row."""
        resolved_user = _require(user_id, "userId")
        resolved_product = _require(product_id, "productId")
        if not _is_number(quantity):
            raise MissingParameter("quantity is required")
        if quantity <= 0:
            self.repository.delete_item(resolved_user, resolved_product)
        else:
            self.repository.set_quantity(resolved_user, resolved_product, quantity)
        return self.list_pantry(resolved_user)

    def remove_item(
        self, user_id: str | None, product_id: str | None
    ) -> list[PantryEntry]:
        """Remove a row; removing an absent row is not an error."""
        resolved_user = _require(user_id, "userId")
        resolved_product = _require(product_id, "productId")
        self.repository.delete_item(resolved_user, resolved_product)
        return self.list_pantry(resolved_user)

    def clear(self, user_id: str | None) -> list[PantryEntry]:
        """Remove every row of a user's pantry."""
        resolved_user = _require(user_id, "userId")
        self.repository.delete_all(resolved_user)
        return []


def parse_pantry_item(payload: Mapping[str, object] | None) -> PantryItemInput:
    """Validate an add-to-pantry payload and fill in defaults."""
    if not payload or payload.get("id") in (None, ""):
        raise MissingParameter("product id is required")
    product_id = str(payload["id"])
    if not is_product_id(product_id):
        raise MissingParameter("product id must be a UUID")
    quantity = payload.get("quantity")
    if quantity is None:
        quantity = DEFAULT_QUANTITY
    elif not _is_number(quantity) or quantity <= 0:
        raise MissingParameter("quantity must be a positive number")
    nutrition = {
        name: _optional_number(payload, name, NUTRITION_ALIASES.get(name))
        for name in NUTRITION_FIELDS
    }
    flags = {name: _optional_flag(payload, name) for name in DIETARY_FLAGS}
    return PantryItemInput(
        product_id=product_id,
        quantity=quantity,
        unit=_optional_text(payload, "unit") or DEFAULT_UNIT,
        quantity_in_grams=_optional_number(payload, "quantity_in_grams"),
        name=_optional_text(payload, "name"),
        brand=_optional_text(payload, "brand"),
        description=_optional_text(payload, "description"),
        category=_optional_text(payload, "category"),
        nutrition=nutrition,
        flags=flags,
    )


def _require(value: str | None, name: str) -> str:
    if not value:
        raise MissingParameter(f"{name} is required")
    return value


def _is_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value)


def _optional_number(
    payload: Mapping[str, object], name: str, alias: str | None = None
) -> float | None:
    value = payload.get(name)
    if value is None and alias:
        value = payload.get(alias)
    if value is None:
        return None
    if not _is_number(value):
        raise MissingParameter(f"{name} must be a number")
    return value


def _optional_flag(payload: Mapping[str, object], name: str) -> bool | None:
    value = payload.get(name)
    if value is None or isinstance(value, bool):
        return value
    raise MissingParameter(f"{name} must be a boolean")


def _optional_text(payload: Mapping[str, object], name: str) -> str | None:
    value = payload.get(name)
    if value is None:
        return None
    return str(value)
