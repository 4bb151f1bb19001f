"""
config.py — Runtime Settings and Allocation Constants

Environment-driven settings (logging) and the fixed constants the allocation
engine relies on. Settings are read once at import time.
"""

import os
from decimal import Decimal

# Logging (normally set via env vars)
LOG_LEVEL = os.environ.get("PAYMENT_ALLOCATOR_LOG_LEVEL", "INFO")
LOG_FILE = os.environ.get("PAYMENT_ALLOCATOR_LOG_FILE", "payment_allocation.log")

# Reserved method id used for loyalty points; also the default promotion of an order
POINTS_METHOD_ID = "PUNKTY"

# Phase 1 only spends methods whose discount is strictly above this percentage
GREEDY_DISCOUNT_THRESHOLD = 10

# Share of an order's value that must be covered by points in a mixed settlement
MIN_POINTS_SHARE = Decimal("0.10")
