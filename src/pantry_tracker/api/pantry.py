"""Pantry endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Body, Query, Request

from pantry_tracker.domain.pantry import PantryEntry

if TYPE_CHECKING:
    from pantry_tracker.containers import AppContainer

router = APIRouter(prefix="/api/pantry", tags=["pantry"])

# Display key -> resolved per-100g field.
DISPLAY_NUTRITION = {
    "calories": "calories_per_100g",
    "protein": "protein_per_100g",
    "carbs": "carbs_per_100g",
    "fat": "fats_per_100g",
    "fiber": "fiber_per_100g",
    "sugar": "sugar_per_100g",
    "sodium": "sodium_per_100g",
}


@router.get("")
def list_pantry(
    request: Request,
    user_id: str | None = Query(default=None, alias="userId"),
) -> list[dict[str, object]]:
    """Return the user's pantry."""
    container: AppContainer = request.app.state.container
    return serialize_entries(container.pantry_service.list_pantry(user_id))


@router.post("")
def add_pantry_item(
    request: Request,
    user_id: str | None = Query(default=None, alias="userId"),
    item: dict[str, Any] | None = Body(default=None),
) -> list[dict[str, object]]:
    """Add a product to the user's pantry."""
    container: AppContainer = request.app.state.container
    return serialize_entries(container.pantry_service.add_item(user_id, item))


@router.put("")
def update_pantry_item(
    request: Request,
    user_id: str | None = Query(default=None, alias="userId"),
    product_id: str | None = Query(default=None, alias="productId"),
    body: dict[str, Any] | None = Body(default=None),
) -> list[dict[str, object]]:
    """Replace the quantity of a pantry item."""
    container: AppContainer = request.app.state.container
    quantity = (body or {}).get("quantity")
    return serialize_entries(
        container.pantry_service.update_quantity(user_id, product_id, quantity)
    )


@router.delete("")
def remove_pantry_item(
    request: Request,
    user_id: str | None = Query(default=None, alias="userId"),
    product_id: str | None = Query(default=None, alias="productId"),
) -> list[dict[str, object]]:
    """Remove a product from the user's pantry."""
    container: AppContainer = request.app.state.container
    return serialize_entries(container.pantry_service.remove_item(user_id, product_id))


@router.delete("/clear")
def clear_pantry(
    request: Request,
    user_id: str | None = Query(default=None, alias="userId"),
) -> list[dict[str, object]]:
    """Remove every item from the user's pantry."""
    container: AppContainer = request.app.state.container
    return serialize_entries(container.pantry_service.clear(user_id))


def serialize_entries(entries: list[PantryEntry]) -> list[dict[str, object]]:
    """Shape a whole pantry read, keeping store order."""
    return [serialize_entry(entry) for entry in entries]


def serialize_entry(entry: PantryEntry) -> dict[str, object]:
    """Shape a pantry entry into the JSON record clients expect."""
    record: dict[str, object] = {
        "id": entry.id,
        "name": entry.name,
        "category": entry.category,
    }
    record.update(
        {key: entry.nutrition[field] for key, field in DISPLAY_NUTRITION.items()}
    )
    if entry.description:
        record["description"] = entry.description
    record["quantity"] = entry.quantity
    if entry.unit is not None:
        record["unit"] = entry.unit
    if entry.quantity_in_grams is not None:
        record["quantity_in_grams"] = entry.quantity_in_grams
    record.update(entry.flags)
    record["addedAt"] = entry.added_at.isoformat()
    return record
