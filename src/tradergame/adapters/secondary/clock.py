from datetime import datetime, timezone

from tradergame.ports.outbound.clock import IClock


class SystemClock(IClock):
    """Wall-clock time in UTC"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
