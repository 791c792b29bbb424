"""
Game calendar.

A game year has 7 months of 24 days each. One tick of wall-clock time
advances the calendar by one day.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta

DAYS_PER_MONTH = 24
MONTHS_PER_YEAR = 7
DAYS_PER_YEAR = DAYS_PER_MONTH * MONTHS_PER_YEAR

TICK_INTERVAL = timedelta(minutes=60)

STARTING_YEAR = 2024


@dataclass(frozen=True, order=True)
class GameDate:
    """Immutable calendar date, ordered by (year, month, day)"""
    year: int
    month: int
    day: int

    def __post_init__(self):
        if not 1 <= self.day <= DAYS_PER_MONTH:
            raise ValueError(f"day must be between 1 and {DAYS_PER_MONTH}, got {self.day}")
        if not 1 <= self.month <= MONTHS_PER_YEAR:
            raise ValueError(f"month must be between 1 and {MONTHS_PER_YEAR}, got {self.month}")
        if self.year < 1:
            raise ValueError(f"year must be positive, got {self.year}")

    @classmethod
    def starting(cls) -> 'GameDate':
        """First day of a new game"""
        return cls(year=STARTING_YEAR, month=1, day=1)

    def advance(self) -> 'GameDate':
        """Return the next calendar day, rolling over month and year"""
        day = self.day + 1
        month = self.month
        year = self.year

        if day > DAYS_PER_MONTH:
            day = 1
            month += 1

        if month > MONTHS_PER_YEAR:
            month = 1
            year += 1

        return GameDate(year=year, month=month, day=day)

    def format(self) -> str:
        return f"Year {self.year}, Month {self.month}, Day {self.day}"

    def format_short(self) -> str:
        return f"{self.year}/{self.month}/{self.day}"

    def __str__(self) -> str:
        return self.format()


def time_until_next_tick(next_tick_time: datetime, now: datetime) -> str:
    """
    Human readable countdown to the next tick.

    Returns "Ready" once the tick is due, otherwise the largest two units
    among hours, minutes and seconds, e.g. "1h 5m", "4m 30s" or "12s".
    """
    remaining = int((next_tick_time - now).total_seconds())
    if remaining <= 0:
        return "Ready"

    hours, rest = divmod(remaining, 3600)
    minutes, seconds = divmod(rest, 60)

    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"
