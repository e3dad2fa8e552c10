"""Translation of Supabase client failures into store errors."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import httpx
from postgrest.exceptions import APIError

from pantry_tracker.errors import StoreUnavailable

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Re-raise PostgREST and transport failures as ``StoreUnavailable``."""
    try:
        yield
    except APIError as exc:
        logger.warning(
            "Supabase call failed",
            extra={"operation": operation, "code": exc.code},
        )
        raise StoreUnavailable(exc.message or str(exc)) from exc
    except httpx.HTTPError as exc:
        logger.warning("Supabase unreachable", extra={"operation": operation})
        raise StoreUnavailable(str(exc) or type(exc).__name__) from exc
