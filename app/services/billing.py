"""
Fee computation for parking tickets.

Hourly rates bill whole hours, rounded up, with a minimum of one hour.
Flat rates bill their fixed price with no duration math.
"""
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from app.exceptions import InvalidStateError
from app.models.rate import BillingMode

SECONDS_PER_HOUR = 3600
MINIMUM_BILLED_HOURS = 1

CLAMP = "clamp"
REJECT = "reject"


@dataclass(frozen=True)
class Fee:
    duration_hours: Optional[int]
    amount: float


def billable_hours(entry_time: datetime, exit_time: datetime, negative_policy: str = CLAMP) -> int:
    """Whole hours to bill for an interval.

    Anything up to one hour, including zero and negative intervals under the
    ``clamp`` policy, bills one hour.
    """
    elapsed = (exit_time - entry_time).total_seconds()
    if elapsed < 0 and negative_policy == REJECT:
        raise InvalidStateError("Exit time is earlier than entry time")
    return max(MINIMUM_BILLED_HOURS, math.ceil(elapsed / SECONDS_PER_HOUR))


def compute_fee(
    entry_time: datetime,
    exit_time: datetime,
    billing_mode: BillingMode,
    price: float,
    negative_policy: str = CLAMP,
) -> Fee:
    if billing_mode == BillingMode.FLAT:
        if negative_policy == REJECT and exit_time < entry_time:
            raise InvalidStateError("Exit time is earlier than entry time")
        return Fee(duration_hours=None, amount=price)

    hours = billable_hours(entry_time, exit_time, negative_policy)
    return Fee(duration_hours=hours, amount=hours * price)
