"""
eligibility.py — Which Payment Methods May Settle an Order
"""

from .models import Order, PaymentMethod


def supports(order: Order, method: PaymentMethod) -> bool:
    """
    Checks whether `method` may be used to pay for `order`.

    An order without promotions is eligible for the points method only.
    """
    return method.id in order.eligible_methods
