"""
engine.py — Core Allocation Logic for Order Payments

This module decides which payment method(s) settle every order of a batch.
It runs three phases in a fixed sequence against a single Ledger.

Workflow Overview:
1. Greedy pass: spend the methods with a discount above 10 % on the cheapest orders first
2. Points settlement: split orders between points and the lowest-discount method,
   upgrade orders to full points payment while the points budget allows, then
   spread the leftover points proportionally over the split orders
3. Fallback: settle whatever is still pending with the best method that fits,
   or force it onto the lowest-discount method at full price
"""

import logging
from decimal import Decimal
from typing import List, Optional, Sequence

from .config import GREEDY_DISCOUNT_THRESHOLD, MIN_POINTS_SHARE
from .eligibility import supports
from .errors import AllocationError
from .ledger import Ledger, check_catalog
from .models import Order, PaymentEntry, PaymentMethod

log = logging.getLogger(__name__)


class AllocationEngine:
    """
    Deterministic three-phase allocator.

    The catalog is ranked once by discount, descending. The sort is stable, so
    methods with equal discounts keep their catalog order. The points method and
    the lowest-discount method (the last ranked one) are resolved here and passed
    explicitly to every phase.
    """
    def __init__(self, methods: Sequence[PaymentMethod]):
        """
        Raises:
            ConfigurationError: If the catalog is empty or has no points method.
        """
        self.points: PaymentMethod = check_catalog(methods)
        self.catalog: List[PaymentMethod] = list(methods)
        self.ranked: List[PaymentMethod] = sorted(self.catalog, key=lambda m: m.discount, reverse=True)
        self.lowest: PaymentMethod = self.ranked[-1]

    def run(self, orders: Sequence[Order], ledger: Optional[Ledger] = None) -> Ledger:
        """
        Settles every order and returns the ledger holding the result.

        Args:
            orders (Sequence[Order]): Orders in catalog order.
            ledger (Ledger | None): Fresh ledger to fill. Built from the catalog when omitted.

        Returns:
            Ledger: Every order has one or two entries.

        Raises:
            AllocationError: If the points upgrade loop does not converge.
        """
        if ledger is None:
            ledger = Ledger(self.catalog)

        by_value = sorted(orders, key=lambda o: o.value)
        log.info(
            f"Starte Zuteilung: {len(orders)} Bestellungen, {len(self.catalog)} Zahlungsmethoden "
            f"(Punkte: {self.points.id}, Fallback: {self.lowest.id})."
        )

        # --- 1. Greedy high-discount pass ---
        self._greedy_pass([o for o in by_value if ledger.is_pending(o.id)], ledger)
        log.info(f"Phase 1 abgeschlossen. Offen: {self._count_pending(orders, ledger)}")

        # --- 2. Points-based mixed settlement ---
        self._settle_with_points(orders, by_value, ledger)
        log.info(f"Phase 2 abgeschlossen. Offen: {self._count_pending(orders, ledger)}")

        # --- 3. Fallback ---
        self._settle_fallback(orders, ledger)

        remaining = ledger.remaining_limit(self.lowest.id)
        if remaining < 0:
            log.warning(f"Limit von {self.lowest.id} überschritten: verbleibend {remaining}.")
        log.info("Zuteilung abgeschlossen.")
        return ledger

    # --- Phase 1 ---

    def _greedy_pass(self, candidates: List[Order], ledger: Ledger):
        """
        Assigns each candidate, in the given order, to the first method above the
        discount threshold that it supports and that still has room for it.

        Candidates that already hold entries get no credit for them: their own
        charge still counts against the method's limit. Every candidate is
        assigned at most once.
        """
        for method in self.ranked:
            if method.discount <= GREEDY_DISCOUNT_THRESHOLD:
                break
            unassigned = []
            for order in candidates:
                if not supports(order, method):
                    unassigned.append(order)
                    continue
                cost = method.discounted(order.value)
                if ledger.remaining_limit(method.id) >= cost:
                    ledger.set_entries(order.id, [PaymentEntry(method_id=method.id, amount=cost)])
                    log.debug(f"[Order: {order.id}] Vollständig bezahlt mit {method.id}: {cost}")
                else:
                    unassigned.append(order)
            candidates = unassigned

    # --- Phase 2 ---

    def _settle_with_points(self, orders: Sequence[Order], by_value: List[Order], ledger: Ledger):
        self._split_minimum_share(orders, ledger)

        rounds = 0
        while self._upgrade_to_points(orders, by_value, ledger):
            rounds += 1
            if rounds > len(orders):
                raise AllocationError(
                    f"Punkte-Upgrade konvergiert nicht nach {rounds} Durchläufen ({len(orders)} Bestellungen)."
                )
        log.info(f"Punkte-Upgrade stabil nach {rounds} Durchläufen mit Änderungen.")

        self._blend_leftover_points(orders, ledger)

    def _split_minimum_share(self, orders: Sequence[Order], ledger: Ledger):
        """
        Settles pending orders with 10 % points and 90 % on the lowest-discount method.

        When the points budget cannot cover the 10 % share of every pending order,
        the orders with the largest share are dropped first (ties: smallest order id).
        The 90 % part is charged without checking the lowest method's limit or the
        order's promotions.
        """
        candidates = [o for o in orders if ledger.is_pending(o.id)]
        if not candidates:
            return

        available = ledger.remaining_limit(self.points.id)
        required_total = sum((o.value * MIN_POINTS_SHARE for o in candidates), Decimal(0))
        while required_total > available and candidates:
            evicted = min(candidates, key=lambda o: (-o.value, o.id))
            candidates = [o for o in candidates if o is not evicted]
            required_total -= evicted.value * MIN_POINTS_SHARE
            log.debug(f"[Order: {evicted.id}] Kein Platz für Punkte-Mindestanteil.")

        for order in candidates:
            points_share = order.value * MIN_POINTS_SHARE
            ledger.set_entries(order.id, [
                PaymentEntry(method_id=self.points.id, amount=points_share),
                PaymentEntry(method_id=self.lowest.id, amount=order.value - points_share),
            ])
        log.info(f"Punkte-Mindestanteil für {len(candidates)} Bestellungen gebucht.")

    def _upgrade_to_points(self, orders: Sequence[Order], by_value: List[Order], ledger: Ledger) -> bool:
        """
        One scan over all orders, moving each order whose full points price fits
        the remaining points budget onto points alone.

        After every upgrade the greedy pass is repeated over the orders not paid by
        points alone, and pending orders get a new minimum-share split.

        Returns:
            bool: True if at least one order was upgraded.
        """
        upgraded = False
        for order in orders:
            if self._paid_by_points_only(ledger.entries_for(order.id)):
                continue
            full_cost = self.points.discounted(order.value)
            if full_cost > ledger.remaining_limit(self.points.id):
                continue

            ledger.set_entries(order.id, [PaymentEntry(method_id=self.points.id, amount=full_cost)])
            log.debug(f"[Order: {order.id}] Vollständig mit Punkten bezahlt: {full_cost}")
            upgraded = True

            others = [o for o in by_value if not self._paid_by_points_only(ledger.entries_for(o.id))]
            self._greedy_pass(others, ledger)
            self._split_minimum_share(orders, ledger)
        return upgraded

    def _blend_leftover_points(self, orders: Sequence[Order], ledger: Ledger):
        """
        Spreads the unspent points budget over the split orders, proportionally to
        their value, capped at the order's discounted total.
        """
        mixed = [o for o in orders if self._is_mixed(ledger.entries_for(o.id))]
        if not mixed:
            return

        extra = ledger.remaining_limit(self.points.id)
        sum_value = sum((o.value for o in mixed), Decimal(0))
        for order in mixed:
            discounted_total = order.value * (1 - MIN_POINTS_SHARE)
            use_points = order.value * MIN_POINTS_SHARE
            if extra > 0 and sum_value > 0:
                use_points += extra * order.value / sum_value
            use_points = min(use_points, discounted_total)
            ledger.set_entries(order.id, [
                PaymentEntry(method_id=self.points.id, amount=use_points),
                PaymentEntry(method_id=self.lowest.id, amount=discounted_total - use_points),
            ])
        log.info(f"Restpunkte ({extra}) auf {len(mixed)} gemischte Bestellungen verteilt.")

    def _paid_by_points_only(self, entries: List[PaymentEntry]) -> bool:
        return len(entries) == 1 and entries[0].method_id == self.points.id

    def _is_mixed(self, entries: List[PaymentEntry]) -> bool:
        has_points = any(e.method_id == self.points.id for e in entries)
        has_other = any(e.method_id != self.points.id for e in entries)
        return has_points and has_other

    # --- Phase 3 ---

    def _settle_fallback(self, orders: Sequence[Order], ledger: Ledger):
        """
        Settles every order still pending. Tries the supported methods by discount,
        descending; if none has room, charges the full value to the lowest method.
        """
        for order in orders:
            if not ledger.is_pending(order.id):
                continue
            for method in self.ranked:
                if not supports(order, method):
                    continue
                cost = method.discounted(order.value)
                if ledger.remaining_limit(method.id) >= cost:
                    ledger.set_entries(order.id, [PaymentEntry(method_id=method.id, amount=cost)])
                    log.info(f"[Order: {order.id}] Fallback: bezahlt mit {method.id}: {cost}")
                    break
            else:
                ledger.set_entries(order.id, [PaymentEntry(method_id=self.lowest.id, amount=order.value)])
                log.warning(
                    f"[Order: {order.id}] Fallback erzwungen: {order.value} voll über {self.lowest.id} "
                    f"(verbleibend: {ledger.remaining_limit(self.lowest.id)})."
                )

    @staticmethod
    def _count_pending(orders: Sequence[Order], ledger: Ledger) -> int:
        return sum(1 for o in orders if ledger.is_pending(o.id))


def allocate(orders: Sequence[Order], methods: Sequence[PaymentMethod]) -> Ledger:
    """
    Runs a complete allocation over a fresh ledger.

    Raises:
        ConfigurationError: If the method catalog is unusable.
        AllocationError: If the points upgrade loop does not converge.
    """
    return AllocationEngine(methods).run(orders)
