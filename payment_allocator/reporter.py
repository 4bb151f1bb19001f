"""
reporter.py — Read-Only Reports over a Finished Ledger

Formats per-method totals and per-order breakdowns. Amounts are rounded
half-up to two decimals for display only; the ledger keeps full precision.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import List, Sequence

from .ledger import Ledger
from .models import MethodSummary, Order, OrderAllocation, OrderPayment

CENT = Decimal("0.01")


def to_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def summary_lines(ledger: Ledger) -> List[str]:
    """One `<methodId> paid=<amount>` line per method, in catalog order."""
    return [f"{method_id} paid={to_cents(ledger.paid_total(method_id))}" for method_id in ledger.method_ids]


def order_breakdown_lines(ledger: Ledger) -> List[str]:
    """Entries of every settled order, sorted by order id."""
    lines = []
    for order_id in sorted(ledger.order_ids):
        lines.append(f"{order_id}:")
        for entry in ledger.entries_for(order_id):
            lines.append(f"  {entry.method_id} -> {to_cents(entry.amount)}")
    return lines


def card_total_line(ledger: Ledger) -> str:
    """Total paid by every method except points."""
    return f"card total={to_cents(ledger.card_total())}"


def unsettled_orders(ledger: Ledger, orders: Sequence[Order]) -> List[Order]:
    return [o for o in orders if ledger.is_pending(o.id)]


def unsettled_lines(ledger: Ledger, orders: Sequence[Order]) -> List[str]:
    """Status of the run: one line per order left without entries, or a single all-clear line."""
    unsettled = unsettled_orders(ledger, orders)
    if not unsettled:
        return ["All orders have been settled."]
    return ["Unsettled orders:"] + [f"  {o.id}: value={to_cents(o.value)}" for o in unsettled]


def method_summaries(ledger: Ledger) -> List[MethodSummary]:
    return [
        MethodSummary(
            methodId=method_id,
            paid=to_cents(ledger.paid_total(method_id)),
            remaining=to_cents(ledger.remaining_limit(method_id)),
        )
        for method_id in ledger.method_ids
    ]


def order_allocations(ledger: Ledger, orders: Sequence[Order]) -> List[OrderAllocation]:
    """Per-order breakdown in the order the orders were submitted."""
    return [
        OrderAllocation(
            orderId=order.id,
            payments=[
                OrderPayment(methodId=e.method_id, amount=to_cents(e.amount))
                for e in ledger.entries_for(order.id)
            ],
        )
        for order in orders
    ]
