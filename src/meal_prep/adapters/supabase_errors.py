"""Translation of Supabase client failures into storage errors."""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal

import httpx
from supabase import PostgrestAPIError

from meal_prep.domain.errors import StorageError


@contextmanager
def storage_errors() -> Iterator[None]:
    """Re-raise PostgREST and transport errors as ``StorageError``."""
    try:
        yield
    except PostgrestAPIError as exc:
        raise StorageError(exc.message or str(exc)) from exc
    except httpx.HTTPError as exc:
        raise StorageError(str(exc) or type(exc).__name__) from exc


def parse_decimal(value: object) -> Decimal:
    """Parse a numeric column without going through binary floats."""
    if value is None:
        return Decimal(0)
    return Decimal(str(value))


def parse_timestamp(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None
