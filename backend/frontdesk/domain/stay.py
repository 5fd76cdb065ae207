"""
Stay duration

Keeps a planned day count and a planned checkout instant consistent with
each other, both anchored at the check-in instant.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from frontdesk.domain.civil_time import add_days, days_between


def normalize_days(days: Optional[int]) -> int:
    return max(1, int(days or 1))


def days_from_checkout(checkout: datetime, checkin: datetime) -> int:
    """Day count implied by a planned checkout"""
    return days_between(checkout, checkin)


def checkout_from_days(checkin: datetime, days: int) -> datetime:
    """Planned checkout implied by a day count"""
    return add_days(checkin, normalize_days(days))


@dataclass(frozen=True)
class StayPlan:
    checkin: datetime
    stay_days: int
    checkout: datetime

    @classmethod
    def from_days(cls, checkin: datetime, days: Optional[int]) -> "StayPlan":
        days = normalize_days(days)
        return cls(checkin=checkin, stay_days=days, checkout=checkout_from_days(checkin, days))

    @classmethod
    def from_checkout(cls, checkin: datetime, checkout: datetime) -> "StayPlan":
        # The operator's chosen checkout is kept as entered
        return cls(checkin=checkin, stay_days=days_from_checkout(checkout, checkin), checkout=checkout)

    def with_days(self, days: Optional[int]) -> "StayPlan":
        return StayPlan.from_days(self.checkin, days)

    def with_checkout(self, checkout: datetime) -> "StayPlan":
        return StayPlan.from_checkout(self.checkin, checkout)


def reconcile(checkin: datetime, stay_days: Optional[int] = None,
              checkout: Optional[datetime] = None) -> StayPlan:
    """
    Build a plan from whichever field the operator edited.

    A checkout wins over a day count when both are given.
    """
    if checkout is not None:
        return StayPlan.from_checkout(checkin, checkout)
    return StayPlan.from_days(checkin, stay_days)
