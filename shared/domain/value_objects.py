"""
Common Value Objects

Value objects used across multiple domains:
- DateRange: Represents a booked period (start to end, both inclusive)
"""

from dataclasses import dataclass
from datetime import date

from shared.domain.base import ValueObject


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Represents a range from start_date to end_date, both inclusive.
    A single-day booking has start_date == end_date.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.start_date > self.end_date:
            raise ValueError(
                f"Start date ({self.start_date}) must not be after end date ({self.end_date})"
            )

    def overlaps_with(self, other: 'DateRange') -> bool:
        """
        Check if this range overlaps with another

        Boundaries are inclusive, so ranges that only touch on an endpoint
        still overlap.

        Examples:
            - DateRange(1, 5) overlaps with DateRange(5, 10) -> True
            - DateRange(1, 5) overlaps with DateRange(6, 10) -> False
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check overlap with another DateRange")

        # start1 <= end2 AND start2 <= end1
        return (self.start_date <= other.end_date and
                other.start_date <= self.end_date)

    def contains(self, check_date: date) -> bool:
        """Check if a date is within this range"""
        return self.start_date <= check_date <= self.end_date

    def __len__(self) -> int:
        """Number of calendar days covered by the range"""
        return (self.end_date - self.start_date).days + 1

    def __str__(self):
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"
