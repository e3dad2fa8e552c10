"""Read-only product catalog endpoints."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from pantry_tracker.domain.products import Product

if TYPE_CHECKING:
    from pantry_tracker.containers import AppContainer

router = APIRouter(prefix="/api/products", tags=["products"])

_LEADING_INT = re.compile(r"\s*([-+]?\d+)")


@router.get("")
def list_products(  # noqa: PLR0913
    request: Request,
    search: str | None = None,
    category: str | None = None,
    is_active: bool | None = None,
    limit: str | None = None,
    offset: str | None = None,
) -> dict[str, object]:
    """Search the product catalog."""
    container: AppContainer = request.app.state.container
    page = container.product_service.list_products(
        search=search,
        category=category,
        is_active=is_active,
        limit=_parse_int(limit),
        offset=_parse_int(offset),
    )
    return {
        "items": [_serialize_product(product) for product in page.items],
        "total": page.total,
        "limit": page.limit,
        "offset": page.offset,
    }


@router.get("/{product_id}")
def get_product(product_id: str, request: Request) -> dict[str, object]:
    """Return a single catalog product."""
    container: AppContainer = request.app.state.container
    return _serialize_product(container.product_service.get_product(product_id))


def _serialize_product(product: Product) -> dict[str, object]:
    record: dict[str, object] = {
        "id": product.id,
        "name": product.name,
        "brand": product.brand,
        "description": product.description,
        "category": product.category,
    }
    record.update(product.nutrition)
    record.update(product.flags)
    record["is_active"] = product.is_active
    return record


def _parse_int(raw: str | None) -> int | None:
    """Read a leading integer from a query value; anything else is None."""
    if raw is None:
        return None
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else None
