"""Shared test fixtures."""

from dataclasses import dataclass, field
import pytest

from pantry_tracker.config import Settings
from pantry_tracker.containers import AppContainer
from pantry_tracker.domain.models import UserRecord
from pantry_tracker.domain.pantry import PantryRow
from pantry_tracker.domain.products import (
    DIETARY_FLAGS,
    LEGACY_NUTRITION_COLUMNS,
    NUTRITION_FIELDS,
    Product,
    ProductPage,
    is_product_id,
)
from pantry_tracker.errors import StoreUnavailable
from pantry_tracker.services.pantry import PantryRepository, PantryService
from pantry_tracker.services.products import ProductRepository, ProductService
from pantry_tracker.services.users import UserRepository, UserService

OATS_ID = "3f2a1c9e-5b7d-4e8f-9a1b-2c3d4e5f6a7b"
MILK_ID = "8c1d2e3f-4a5b-4c6d-8e7f-9a0b1c2d3e4f"
TAHINI_ID = "b7e6d5c4-3a2b-4c1d-9e0f-1a2b3c4d5e6f"


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[str, dict[str, str]] = field(default_factory=dict)
    calls: int = 0
    fail: bool = False

    def insert_if_missing(self, user: UserRecord, password_hash: str) -> None:
        self.calls += 1
        if self.fail:
            raise StoreUnavailable("users table unavailable")
        self.users.setdefault(
            user.id, {"email": user.email, "password_hash": password_hash}
        )


@dataclass
class InMemoryProductRepository(ProductRepository):
    """In-memory product catalog for tests.

    Like the Supabase adapter, ids that are not UUIDs never match and are
    never stored.
    """

    products: dict[str, Product] = field(default_factory=dict)
    batch_lookups: list[list[str]] = field(default_factory=list)
    created: list[dict[str, object]] = field(default_factory=list)
    return_no_id: bool = False
    fail_on_create: bool = False

    def get_products_by_ids(self, product_ids: list[str]) -> list[Product]:
        self.batch_lookups.append(list(product_ids))
        return [
            product
            for product_id, product in self.products.items()
            if product_id in product_ids and is_product_id(product_id)
        ]

    def get_product(self, product_id: str) -> Product | None:
        if not is_product_id(product_id):
            return None
        return self.products.get(product_id)

    def create_product(self, payload: dict[str, object]) -> str | None:
        if self.fail_on_create:
            raise StoreUnavailable("products table unavailable")
        self.created.append(payload)
        product_id = payload.get("id")
        if self.return_no_id or not is_product_id(product_id):
            return None
        if product_id in self.products:
            return product_id
        self.products[product_id] = Product(
            id=product_id,
            name=payload.get("name"),
            brand=payload.get("brand"),
            description=payload.get("description"),
            category=payload.get("category"),
            nutrition={
                name: payload.get(name)
                for name in (*NUTRITION_FIELDS, *LEGACY_NUTRITION_COLUMNS.values())
            },
            flags={name: payload.get(name) for name in DIETARY_FLAGS},
        )
        return product_id

    def list_products(  # noqa: PLR0913
        self,
        search: str | None,
        category: str | None,
        is_active: bool | None,
        limit: int,
        offset: int,
    ) -> ProductPage:
        matches = [
            product
            for product in self.products.values()
            if (category is None or product.category == category)
            and (is_active is None or product.is_active == is_active)
            and (search is None or search.lower() in (product.name or "").lower())
        ]
        return ProductPage(
            items=matches[offset : offset + limit],
            total=len(matches),
            limit=limit,
            offset=offset,
        )


@dataclass
class InMemoryPantryRepository(PantryRepository):
    """In-memory pantry rows keyed by (user, product)."""

    rows: dict[tuple[str, str], PantryRow] = field(default_factory=dict)
    fail_on_list: bool = False

    def list_items(self, user_id: str) -> list[PantryRow]:
        if self.fail_on_list:
            raise StoreUnavailable("pantry table unavailable")
        return [row for (owner, _), row in self.rows.items() if owner == user_id]

    def add_quantity(  # noqa: PLR0913
        self,
        user_id: str,
        product_id: str,
        quantity: float,
        unit: str,
        quantity_in_grams: float | None,
        overrides: dict[str, object],
    ) -> None:
        existing = self.rows.get((user_id, product_id))
        total = quantity + (existing.quantity if existing else 0)
        self.rows[(user_id, product_id)] = PantryRow(
            user_id=user_id,
            product_id=product_id,
            quantity=total,
            unit=unit,
            quantity_in_grams=quantity_in_grams,
            overrides=dict(overrides),
        )

    def set_quantity(self, user_id: str, product_id: str, quantity: float) -> None:
        existing = self.rows.get((user_id, product_id))
        if existing is None:
            return
        self.rows[(user_id, product_id)] = PantryRow(
            user_id=existing.user_id,
            product_id=existing.product_id,
            quantity=quantity,
            unit=existing.unit,
            quantity_in_grams=existing.quantity_in_grams,
            overrides=existing.overrides,
        )

    def delete_item(self, user_id: str, product_id: str) -> None:
        self.rows.pop((user_id, product_id), None)

    def delete_all(self, user_id: str) -> None:
        for key in [key for key in self.rows if key[0] == user_id]:
            del self.rows[key]


def make_product(product_id: str = OATS_ID, **overrides: object) -> Product:
    """Build a catalog product with every nutrition field set."""
    nutrition = {
        "calories_per_100g": 50.0,
        "protein_per_100g": 5.0,
        "carbs_per_100g": 10.0,
        "fats_per_100g": 1.0,
        "fiber_per_100g": 2.0,
        "sugar_per_100g": 3.0,
        "sodium_per_100g": 0.1,
    }
    nutrition.update(overrides.pop("nutrition", {}))
    flags = {name: True for name in DIETARY_FLAGS}
    flags.update(overrides.pop("flags", {}))
    values: dict[str, object] = {
        "id": product_id,
        "name": "Oats",
        "brand": "Acme",
        "description": "Rolled oats",
        "category": "Grains",
        "nutrition": nutrition,
        "flags": flags,
    }
    values.update(overrides)
    return Product(**values)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
            ".eyJyb2xlIjoic2VydmljZV9yb2xlIn0"
            ".c2lnbmF0dXJl"
        ),
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def product_repository() -> InMemoryProductRepository:
    return InMemoryProductRepository()


@pytest.fixture
def pantry_repository() -> InMemoryPantryRepository:
    return InMemoryPantryRepository()


@pytest.fixture
def pantry_service(
    user_repository: InMemoryUserRepository,
    product_repository: InMemoryProductRepository,
    pantry_repository: InMemoryPantryRepository,
) -> PantryService:
    return PantryService(
        repository=pantry_repository,
        product_service=ProductService(product_repository),
        user_service=UserService(user_repository),
    )


@pytest.fixture
def container(settings: Settings, pantry_service: PantryService) -> AppContainer:
    return AppContainer(
        settings=settings,
        user_service=pantry_service.user_service,
        product_service=pantry_service.product_service,
        pantry_service=pantry_service,
    )
