"""Game calendar domain"""
from .game_date import (
    GameDate,
    DAYS_PER_MONTH,
    MONTHS_PER_YEAR,
    DAYS_PER_YEAR,
    TICK_INTERVAL,
    time_until_next_tick,
)

__all__ = [
    'GameDate',
    'DAYS_PER_MONTH',
    'MONTHS_PER_YEAR',
    'DAYS_PER_YEAR',
    'TICK_INTERVAL',
    'time_until_next_tick',
]
