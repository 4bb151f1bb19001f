"""
loader.py — Input Loading for the Allocation Run

Reads the two JSON sources (orders, payment methods) and validates them into
typed records before the engine starts. Any failure here aborts the run.
"""

import logging
from pathlib import Path
from typing import List, Type, TypeVar, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from .errors import LoadError
from .models import Order, PaymentMethod

log = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def _load_records(path: Union[str, Path], model: Type[T]) -> List[T]:
    """
    Parses a JSON array of `model` records from `path`.
    Raises:
        LoadError: If the file cannot be read or does not deserialize into `model` records.
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        log.error(f"Datei {path} kann nicht gelesen werden: {e}")
        raise LoadError(f"Cannot read {path}: {e}") from e

    try:
        records = TypeAdapter(List[model]).validate_json(raw)
    except ValidationError as e:
        log.error(f"Ungültige Daten in {path}: {e.error_count()} Fehler.")
        raise LoadError(f"Invalid {model.__name__} data in {path}: {e}") from e

    log.info(f"{len(records)} {model.__name__}-Einträge aus {path} geladen.")
    return records


def load_orders(path: Union[str, Path]) -> List[Order]:
    return _load_records(path, Order)


def load_payment_methods(path: Union[str, Path]) -> List[PaymentMethod]:
    return _load_records(path, PaymentMethod)
