"""
models.py — Data Models for Payment Allocation

This module defines the records the allocator works with. It uses Pydantic
models so that input files and API payloads are validated on the way in.

Models:
    - Order: A purchase to be paid for, with optional promotions.
    - PaymentMethod: A payment channel with a discount and a spending limit.
    - PaymentEntry: One (method, amount) line of an order's settlement.
    - AllocationRequest / AllocationResponse: Payloads of the HTTP API.
"""

from decimal import Decimal
from typing import FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .config import POINTS_METHOD_ID


class Order(BaseModel):
    """
    Represents a single order to be settled.

    Attributes:
        id (str): Unique identifier of the order within a run.
        value (Decimal): Undiscounted price of the order.
        promotions (List[str] | None): Ids of the methods the order may be paid with.
            When absent, the order may only be paid with points.
    """
    id: str
    value: Decimal = Field(..., ge=0)
    promotions: Optional[List[str]] = None

    @property
    def eligible_methods(self) -> FrozenSet[str]:
        if self.promotions is None:
            return frozenset({POINTS_METHOD_ID})
        return frozenset(self.promotions)


class PaymentMethod(BaseModel):
    """
    Represents a payment method available to the whole batch.

    Attributes:
        id (str): Unique identifier of the method.
        discount (int): Discount in percent (0-100) granted when an order is paid in full with it.
        limit (Decimal): Initial spendable budget of the method.
    """
    id: str
    discount: int = Field(..., ge=0, le=100)
    limit: Decimal = Field(..., ge=0)

    def discounted(self, value: Decimal) -> Decimal:
        """Price of `value` after this method's discount."""
        return value * (1 - Decimal(self.discount) / 100)


class PaymentEntry(BaseModel):
    """One line of an order's settlement: `amount` charged to `method_id`."""
    model_config = ConfigDict(frozen=True)

    method_id: str
    amount: Decimal


# --- HTTP API payloads ---

class AllocationRequest(BaseModel):
    """
    Batch submitted to the allocation endpoint.

    Attributes:
        orders (List[Order]): Orders to settle, in catalog order.
        paymentMethods (List[PaymentMethod]): The method catalog, in catalog order.
    """
    orders: List[Order]
    paymentMethods: List[PaymentMethod]


class MethodSummary(BaseModel):
    methodId: str
    paid: Decimal
    remaining: Decimal


class OrderPayment(BaseModel):
    methodId: str
    amount: Decimal


class OrderAllocation(BaseModel):
    orderId: str
    payments: List[OrderPayment]


class AllocationResponse(BaseModel):
    """Per-method totals and the per-order breakdown of a finished run."""
    summary: List[MethodSummary]
    orders: List[OrderAllocation]
