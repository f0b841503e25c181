"""Status classification for stock entries.

The status is never stored as an independent fact: it is recomputed from
scratch on every write from the current quantity, the threshold and the
batch expiry dates.  The rules are evaluated in a fixed priority order so
that running out (or nearly out) of stock always outranks stale stock:

    1. current == 0                        -> Depleted
    2. current <  threshold * 0.2          -> Critical
    3. current <  threshold                -> Low Stock
    4. a batch expired before *now*        -> Expired
    5. otherwise                           -> In-Stock
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Iterable

CRITICAL_RATIO = 0.2


class StockStatus(Enum):
    IN_STOCK = "In-Stock"
    LOW_STOCK = "Low Stock"
    CRITICAL = "Critical"
    DEPLETED = "Depleted"
    EXPIRED = "Expired"


def classify_status(
    current_quantity: int,
    threshold: int,
    expiry_dates: Iterable[datetime],
    now: datetime,
) -> StockStatus:
    if current_quantity == 0:
        return StockStatus.DEPLETED
    if current_quantity < threshold * CRITICAL_RATIO:
        return StockStatus.CRITICAL
    if current_quantity < threshold:
        return StockStatus.LOW_STOCK
    if current_quantity > 0 and any(expiry < now for expiry in expiry_dates):
        return StockStatus.EXPIRED
    return StockStatus.IN_STOCK


def available_quantity(current_quantity: int, reserved_quantity: int) -> int:
    """On-hand stock minus reservations, floored at zero."""
    return max(0, current_quantity - reserved_quantity)
