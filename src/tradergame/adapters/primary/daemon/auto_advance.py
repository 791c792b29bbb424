"""Auto-advance scheduler

Polls the game clock and runs a tick whenever wall-clock time reaches the
next scheduled tick. Ticks are dispatched as AdvanceGameTickCommand, so
automatic and manual ticks share one processing guard and at most one runs
at a time.

After a long gap (process suspended, machine asleep) only one tick is
executed; the next tick is then scheduled a full interval from now.
"""
import asyncio
import logging
from collections import deque
from typing import Any, Optional

from tradergame.application.game.commands.advance_game_tick import AdvanceGameTickCommand
from tradergame.application.game.tick import GameTickResult
from tradergame.domain.game.state import GameStateAggregator
from tradergame.ports.outbound.clock import IClock
from .types import SchedulerStatus, SchedulerLogEntry

logger = logging.getLogger(__name__)


class AutoAdvanceScheduler:
    """Single cooperative task driving ticks of the shared game clock"""

    def __init__(
        self,
        mediator: Any,
        game_state: GameStateAggregator,
        clock: IClock,
        poll_interval: float = 1.0,
        max_log_entries: int = 200
    ):
        """
        Args:
            mediator: Mediator used to dispatch AdvanceGameTickCommand
            game_state: Aggregator holding the game clock
            clock: Source of wall-clock time
            poll_interval: Seconds between due checks
            max_log_entries: Size of the in-memory activity log
        """
        self.mediator = mediator
        self.game_state = game_state
        self.clock = clock
        self.poll_interval = poll_interval
        self.cancel_event = asyncio.Event()
        self.status = SchedulerStatus.STARTING
        self.ticks_executed = 0
        self.last_result: Optional[GameTickResult] = None
        self.logs = deque(maxlen=max_log_entries)

    async def check_once(self) -> Optional[GameTickResult]:
        """
        Run a tick if one is due.

        Failures are logged and swallowed so the polling loop keeps going;
        the tick is retried on the next check.

        Returns:
            The tick result, or None when nothing was due or the tick failed
        """
        state = self.game_state.current()
        if state.is_processing or not state.is_due(self.clock.now()):
            return None

        command = AdvanceGameTickCommand(require_facilities=True)
        try:
            result = await self.mediator.send_async(command)
        except Exception as e:
            self.log(f"Tick failed: {e}", level="ERROR")
            logger.error(f"Auto-advance tick failed: {e}", exc_info=True)
            return None

        self._record(result)
        return result

    async def handle_advance_tick(self) -> GameTickResult:
        """
        Run a tick now, regardless of the schedule.

        Goes through the same guard as automatic ticks, so a manual request
        during an automatic tick is rejected. Persistence errors propagate.
        """
        command = AdvanceGameTickCommand()
        result = await self.mediator.send_async(command)
        self._record(result)
        return result

    async def run(self):
        """Poll until stop() is called"""
        self.log(f"Auto-advance started (poll every {self.poll_interval}s)")
        while not self.cancel_event.is_set():
            await self.check_once()
            try:
                await asyncio.wait_for(self.cancel_event.wait(), timeout=self.poll_interval)
            except asyncio.TimeoutError:
                pass
        self.log(f"Auto-advance stopped after {self.ticks_executed} ticks")

    async def start(self):
        """Entry point - runs the polling loop and tracks status"""
        try:
            self.status = SchedulerStatus.RUNNING
            await self.run()
            self.status = SchedulerStatus.STOPPED
        except asyncio.CancelledError:
            self.status = SchedulerStatus.STOPPED
            self.log("Scheduler cancelled", level="WARNING")
            raise
        except Exception as e:
            self.status = SchedulerStatus.FAILED
            self.log(f"Scheduler failed: {e}", level="ERROR")
            logger.error(f"Scheduler failed: {e}", exc_info=True)
            raise

    def stop(self):
        """Ask the polling loop to exit after the current check"""
        self.status = SchedulerStatus.STOPPING
        self.cancel_event.set()

    def log(self, message: str, level: str = "INFO"):
        """Record scheduler activity in memory and in the module logger"""
        self.logs.append(SchedulerLogEntry(timestamp=self.clock.now(), level=level, message=message))
        logger.log(getattr(logging, level, logging.INFO), f"[scheduler] {message}")

    def _record(self, result: GameTickResult):
        self.last_result = result
        if result.success:
            self.ticks_executed += 1
            self.log(
                f"Tick {result.tick} ({result.date.format_short()}): "
                f"{len(result.completions)} completions"
            )
            for error in result.persistence_errors:
                self.log(f"Facility {error.facility_id} not saved: {error.message}", level="ERROR")
        elif result.rejected:
            self.log("Tick rejected, another tick in progress", level="WARNING")
        elif result.skipped:
            self.log("Tick skipped, no facilities", level="DEBUG")
