"""Terminal result of the watchdog's wait phase."""

from enum import Enum


class WatchdogOutcome(Enum):
    """Why the wait ended.

    Every outcome leads to the restore saga; only the message shown to
    the operator differs. FAILED is set by the orchestrator when the wait
    itself raised.
    """

    CONNECTED = "connected"
    TIMED_OUT = "timed_out"
    ABORTED = "aborted"
    FAILED = "failed"
