"""Supabase implementation for user pantries."""

from dataclasses import dataclass

from supabase import Client

from pantry_tracker.adapters.supabase_errors import store_errors
from pantry_tracker.adapters.supabase_rows import to_float, to_quantity
from pantry_tracker.domain.pantry import PantryRow
from pantry_tracker.domain.products import (
    DIETARY_FLAGS,
    NUTRITION_FIELDS,
    is_product_id,
)
from pantry_tracker.services.pantry import PantryRepository

PANTRY_TABLE = "user_pantry_items"
PANTRY_COLUMNS = ", ".join(
    (
        "product_id",
        "quantity",
        "unit",
        "quantity_in_grams",
        *NUTRITION_FIELDS,
        *DIETARY_FLAGS,
    )
)
# Defined in supabase/migrations; inserts or increments in one statement.
ADD_PANTRY_ITEM_FUNCTION = "add_pantry_item"


@dataclass
class SupabasePantryRepository(PantryRepository):
    """Supabase-backed repository for pantry rows."""

    client: Client

    def list_items(self, user_id: str) -> list[PantryRow]:
        """Return all pantry rows for a user in store order."""
        with store_errors("pantry.select"):
            response = (
                self.client.table(PANTRY_TABLE)
                .select(PANTRY_COLUMNS)
                .eq("user_id", user_id)
                .execute()
            )
        return [_parse_row(user_id, row) for row in response.data or []]

    def add_quantity(  # noqa: PLR0913
        self,
        user_id: str,
        product_id: str,
        quantity: float,
        unit: str,
        quantity_in_grams: float | None,
        overrides: dict[str, object],
    ) -> None:
        """Insert the row or atomically add to its quantity."""
        with store_errors("pantry.add"):
            self.client.rpc(
                ADD_PANTRY_ITEM_FUNCTION,
                {
                    "p_user_id": user_id,
                    "p_product_id": product_id,
                    "p_quantity": quantity,
                    "p_unit": unit,
                    "p_quantity_in_grams": quantity_in_grams,
                    "p_overrides": overrides,
                },
            ).execute()

    def set_quantity(self, user_id: str, product_id: str, quantity: float) -> None:
        """Replace the quantity of a pantry row."""
        if not is_product_id(product_id):
            return
        with store_errors("pantry.update"):
            self.client.table(PANTRY_TABLE).update({"quantity": quantity}).eq(
                "user_id", user_id
            ).eq("product_id", product_id).execute()

    def delete_item(self, user_id: str, product_id: str) -> None:
        """Delete a pantry row if it exists."""
        if not is_product_id(product_id):
            return
        with store_errors("pantry.delete"):
            self.client.table(PANTRY_TABLE).delete().eq("user_id", user_id).eq(
                "product_id", product_id
            ).execute()

    def delete_all(self, user_id: str) -> None:
        """Delete all pantry rows for a user."""
        with store_errors("pantry.clear"):
            self.client.table(PANTRY_TABLE).delete().eq("user_id", user_id).execute()


def _parse_row(user_id: str, row: dict[str, object]) -> PantryRow:
    """Parse a pantry row into a domain model."""
    overrides: dict[str, object] = {
        name: to_float(row.get(name)) for name in NUTRITION_FIELDS
    }
    overrides.update({name: row.get(name) for name in DIETARY_FLAGS})
    return PantryRow(
        user_id=user_id,
        product_id=str(row["product_id"]),
        quantity=to_quantity(row.get("quantity")),
        unit=row.get("unit"),
        quantity_in_grams=to_float(row.get("quantity_in_grams")),
        overrides=overrides,
    )
