"""Product catalog services."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from pantry_tracker.domain.pantry import PantryItemInput
from pantry_tracker.domain.products import (
    DIETARY_FLAGS,
    LEGACY_NUTRITION_COLUMNS,
    NUTRITION_FIELDS,
    Product,
    ProductPage,
)
from pantry_tracker.errors import NotFound, StoreUnavailable, ValidationFailed

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200
CUSTOM_PRODUCT_NAME = "Custom Item"


class ProductRepository(Protocol):
    """Persistence interface for the product catalog."""

    def get_products_by_ids(self, product_ids: list[str]) -> list[Product]:
        """Return the products matching the given ids, in store order."""

    def get_product(self, product_id: str) -> Product | None:
        """Return a product by id, if present."""

    def create_product(self, payload: dict[str, object]) -> str | None:
        """Insert a product row and return its id.

        The payload's ``id`` is kept; inserting an id that already exists
        leaves the stored row untouched.
        """

    def list_products(  # noqa: PLR0913
        self,
        search: str | None,
        category: str | None,
        is_active: bool | None,
        limit: int,
        offset: int,
    ) -> ProductPage:
        """Return a filtered page of products."""


@dataclass
class ProductService:
    """Application service for catalog lookups and shadow products."""

    repository: ProductRepository

    def resolve(self, product_ids: Iterable[str]) -> list[Product]:
        """Batch-load products; an empty id set never hits the store."""
        unique_ids = list(dict.fromkeys(product_ids))
        if not unique_ids:
            return []
        return self.repository.get_products_by_ids(unique_ids)

    def ensure_product(self, item: PantryItemInput) -> str:
        """Return the catalog id to use for a pantry item.

        Unknown ids get a minimal product built from the payload under the
        same id, so repeated adds of a new product share one catalog row.
        """
        existing = self.repository.get_product(item.product_id)
        if existing is not None:
            return existing.id
        try:
            created_id = self.repository.create_product(shadow_product_payload(item))
        except StoreUnavailable as exc:
            raise ValidationFailed(exc.message) from exc
        if not created_id:
            raise ValidationFailed("Failed to create product for pantry item")
        logger.info(
            "Created catalog product for pantry item",
            extra={"product_id": created_id},
        )
        return created_id

    def get_product(self, product_id: str) -> Product:
        """Return a product or raise when it is not in the catalog."""
        product = self.repository.get_product(product_id)
        if product is None:
            raise NotFound("Product not found")
        return product

    def list_products(  # noqa: PLR0913
        self,
        search: str | None = None,
        category: str | None = None,
        is_active: bool | None = None,
        limit: int | None = DEFAULT_PAGE_SIZE,
        offset: int | None = 0,
    ) -> ProductPage:
        """Search the catalog with clamped paging.

        A missing or zero ``limit`` means the default page size.
        """
        term = search.strip() if search else None
        return self.repository.list_products(
            search=term or None,
            category=category or None,
            is_active=is_active,
            limit=min(max(limit or DEFAULT_PAGE_SIZE, 1), MAX_PAGE_SIZE),
            offset=max(offset or 0, 0),
        )


def shadow_product_payload(item: PantryItemInput) -> dict[str, object]:
    """Build the minimal product row for an unknown pantry product."""
    payload: dict[str, object] = {
        "id": item.product_id,
        "name": item.name or CUSTOM_PRODUCT_NAME,
        "brand": item.brand,
        "description": item.description,
        "category": item.category,
    }
    payload.update({name: item.nutrition.get(name) for name in NUTRITION_FIELDS})
    for primary, legacy in LEGACY_NUTRITION_COLUMNS.items():
        payload[legacy] = item.nutrition.get(primary)
    payload.update({name: bool(item.flags.get(name)) for name in DIETARY_FLAGS})
    payload["is_active"] = True
    return payload
