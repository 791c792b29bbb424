"""Scheduler types and enums for the auto-advance daemon"""
from enum import Enum
from dataclasses import dataclass
from datetime import datetime


class SchedulerStatus(Enum):
    """Scheduler lifecycle status"""
    STARTING = "STARTING"
    RUNNING = "RUNNING"
    STOPPING = "STOPPING"
    STOPPED = "STOPPED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class SchedulerLogEntry:
    """One line of scheduler activity"""
    timestamp: datetime
    level: str
    message: str
