"""Supabase implementation for the product catalog."""

import re
from dataclasses import dataclass

from supabase import Client

from pantry_tracker.adapters.supabase_errors import store_errors
from pantry_tracker.adapters.supabase_rows import to_float
from pantry_tracker.domain.products import (
    DIETARY_FLAGS,
    LEGACY_NUTRITION_COLUMNS,
    NUTRITION_FIELDS,
    Product,
    ProductPage,
    is_product_id,
)
from pantry_tracker.services.products import ProductRepository

SEARCH_COLUMNS = ("name", "brand", "category", "description")
# Characters with meaning inside a PostgREST or=() filter.
_FILTER_SYNTAX = re.compile(r"[,()*%]")


@dataclass
class SupabaseProductRepository(ProductRepository):
    """Supabase-backed repository for catalog products."""

    client: Client

    def get_products_by_ids(self, product_ids: list[str]) -> list[Product]:
        """Return products for the ids; ids that are not UUIDs cannot match."""
        valid_ids = [
            product_id for product_id in product_ids if is_product_id(product_id)
        ]
        if not valid_ids:
            return []
        with store_errors("products.select"):
            response = (
                self.client.table("products").select("*").in_("id", valid_ids).execute()
            )
        return [_parse_product(row) for row in response.data or []]

    def get_product(self, product_id: str) -> Product | None:
        """Return a product by id, if present."""
        if not is_product_id(product_id):
            return None
        with store_errors("products.select"):
            response = (
                self.client.table("products")
                .select("*")
                .eq("id", product_id)
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_product(response.data[0])

    def create_product(self, payload: dict[str, object]) -> str | None:
        """Insert a product under its requested id and return that id.

        The insert is on-conflict-do-nothing, so concurrent adds of the same
        new product converge on one row. Ids that are not UUIDs cannot be
        stored and yield None without a write.
        """
        row = dict(payload)
        requested_id = row.pop("id", None)
        if not is_product_id(requested_id):
            return None
        with store_errors("products.upsert"):
            self.client.table("products").upsert(
                {"id": requested_id, **row},
                on_conflict="id",
                ignore_duplicates=True,
            ).execute()
        return requested_id

    def list_products(  # noqa: PLR0913
        self,
        search: str | None,
        category: str | None,
        is_active: bool | None,
        limit: int,
        offset: int,
    ) -> ProductPage:
        """Return a page of products, newest updates first."""
        query = self.client.table("products").select("*", count="exact")
        if category:
            query = query.eq("category", category)
        if is_active is not None:
            query = query.eq("is_active", is_active)
        term = _FILTER_SYNTAX.sub(" ", search).strip() if search else ""
        if term:
            query = query.or_(
                ",".join(f"{column}.ilike.%{term}%" for column in SEARCH_COLUMNS)
            )
        with store_errors("products.list"):
            response = (
                query.order("updated_at", desc=True)
                .range(offset, offset + limit - 1)
                .execute()
            )
        items = [_parse_product(row) for row in response.data or []]
        total = response.count if response.count is not None else len(items)
        return ProductPage(items=items, total=total, limit=limit, offset=offset)


def _parse_product(row: dict[str, object]) -> Product:
    """Parse a products row into a domain model."""
    nutrition_columns = (*NUTRITION_FIELDS, *LEGACY_NUTRITION_COLUMNS.values())
    return Product(
        id=str(row["id"]),
        name=row.get("name"),
        brand=row.get("brand"),
        description=row.get("description"),
        category=row.get("category"),
        nutrition={name: to_float(row.get(name)) for name in nutrition_columns},
        flags={name: row.get(name) for name in DIETARY_FLAGS},
        is_active=bool(row.get("is_active", True)),
    )
