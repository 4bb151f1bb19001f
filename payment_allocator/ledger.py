"""
ledger.py — Settlement Ledger

Holds, per order, the payment entries that currently settle it and derives
every method's remaining limit from them on demand.

Invariants:
    - `set_entries` replaces an order's entries, it never appends.
    - Remaining limits are recomputed from all recorded entries on every call,
      so they always reflect the latest overwrite.
"""

import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Sequence

from .config import POINTS_METHOD_ID
from .errors import ConfigurationError
from .models import PaymentEntry, PaymentMethod

log = logging.getLogger(__name__)


def check_catalog(methods: Sequence[PaymentMethod]) -> PaymentMethod:
    """
    Validates the payment method catalog and returns its points method.
    Raises:
        ConfigurationError: If the catalog is empty or has no points method.
    """
    if not methods:
        raise ConfigurationError("Payment method catalog is empty.")
    points = next((m for m in methods if m.id == POINTS_METHOD_ID), None)
    if points is None:
        raise ConfigurationError(f"Payment method catalog has no '{POINTS_METHOD_ID}' method.")
    return points


class Ledger:
    """
    Record of which methods paid what, per order.
    """
    def __init__(self, methods: Sequence[PaymentMethod]):
        """
        Captures the initial limit of every method in catalog order.
        Raises:
            ConfigurationError: If the catalog is empty or has no points method.
        """
        check_catalog(methods)

        self._initial_limits: Dict[str, Decimal] = {m.id: m.limit for m in methods}
        self._entries: Dict[str, List[PaymentEntry]] = {}

    @property
    def method_ids(self) -> List[str]:
        """Method ids in catalog order."""
        return list(self._initial_limits)

    @property
    def order_ids(self) -> List[str]:
        """Ids of every order that has been assigned entries at least once."""
        return list(self._entries)

    def set_entries(self, order_id: str, entries: Iterable[PaymentEntry]):
        """Replaces the entries of `order_id`. The sum is not checked against the order value."""
        self._entries[order_id] = list(entries)
        log.debug(f"[Order: {order_id}] Entries set: {self._entries[order_id]}")

    def entries_for(self, order_id: str) -> List[PaymentEntry]:
        return list(self._entries.get(order_id, []))

    def is_pending(self, order_id: str) -> bool:
        return not self._entries.get(order_id)

    def paid_total(self, method_id: str) -> Decimal:
        """Sum of all recorded amounts charged to `method_id`, across all orders."""
        return sum(
            (e.amount for entries in self._entries.values() for e in entries if e.method_id == method_id),
            Decimal(0),
        )

    def remaining_limit(self, method_id: str) -> Decimal:
        """Initial limit minus everything currently charged to `method_id`. May go negative."""
        return self._initial_limits.get(method_id, Decimal(0)) - self.paid_total(method_id)

    def card_total(self) -> Decimal:
        """Sum paid by every method except points."""
        return sum(
            (self.paid_total(method_id) for method_id in self._initial_limits if method_id != POINTS_METHOD_ID),
            Decimal(0),
        )
