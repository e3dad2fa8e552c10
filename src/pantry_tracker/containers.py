"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from pantry_tracker.adapters.supabase_pantry_repository import (
    SupabasePantryRepository,
)
from pantry_tracker.adapters.supabase_product_repository import (
    SupabaseProductRepository,
)
from pantry_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from pantry_tracker.config import Settings
from pantry_tracker.services.pantry import PantryService
from pantry_tracker.services.products import ProductService
from pantry_tracker.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    product_service: ProductService
    pantry_service: PantryService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_service = UserService(SupabaseUserRepository(supabase_client))
    product_service = ProductService(SupabaseProductRepository(supabase_client))
    pantry_service = PantryService(
        repository=SupabasePantryRepository(supabase_client),
        product_service=product_service,
        user_service=user_service,
    )
    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        product_service=product_service,
        pantry_service=pantry_service,
    )
