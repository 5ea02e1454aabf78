"""
Volunteer alert simulator.

State machine:
    LISTENING --(timer fires / simulate)--> ALERTING --(acknowledge)--> LISTENING

While ALERTING the feedback device vibrates with a repeating pattern and
flashes. Acknowledging stops both and schedules the next mock alert after a
random delay.
"""

import math
import random
import sys
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional, Sequence, TextIO
import logging

logger = logging.getLogger(__name__)

MOCK_ALERTS = (
    "Assist a user to reach Auditorium Gate.",
    "Guide a visually impaired person to the Cafeteria.",
    "Help a wheelchair user navigate to Block B.",
    "Support a deaf attendee at Registration Desk.",
    "Escort senior citizen to Medical Help Desk.",
)

UPCOMING_EVENTS = (
    "Accessibility Walk - 5 PM",
    "Support Camp - Hall 2",
    "Volunteer Meet - Nov 6",
)

# wait, vibrate, pause, vibrate (milliseconds); repeated until acknowledged
VIBRATION_PATTERN = (0, 400, 100, 400)
FLASH_STEP_MS = 500

MIN_DELAY_MS = 15000
MAX_DELAY_MS = 30000


class SimulatorState(str, Enum):
    LISTENING = "LISTENING"
    ALERTING = "ALERTING"


class FeedbackDevice(ABC):
    """Haptic and visual output used by the simulator."""

    @abstractmethod
    def vibrate(self, pattern: Sequence[int], repeat: bool) -> None:
        raise NotImplementedError

    @abstractmethod
    def cancel_vibration(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def start_flash(self, step_ms: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def stop_flash(self) -> None:
        raise NotImplementedError

    def show_alert(self, message: str) -> None:
        pass

    def show_listening(self, next_alert_in_seconds: Optional[int]) -> None:
        pass


class ConsoleFeedbackDevice(FeedbackDevice):
    """Terminal rendition: the bell stands in for vibration."""

    def __init__(self, stream: TextIO = None):
        self.stream = stream or sys.stdout
        self.vibrating = False
        self.flashing = False

    def _write(self, line: str) -> None:
        self.stream.write(line + "\n")
        self.stream.flush()

    def vibrate(self, pattern: Sequence[int], repeat: bool) -> None:
        self.vibrating = True
        self._write(f"\a[VIBRATE] pattern={list(pattern)} repeat={repeat}")

    def cancel_vibration(self) -> None:
        if self.vibrating:
            self._write("[VIBRATE] stopped")
        self.vibrating = False

    def start_flash(self, step_ms: int) -> None:
        self.flashing = True
        self._write(f"[FLASH] on ({step_ms} ms fade)")

    def stop_flash(self) -> None:
        if self.flashing:
            self._write("[FLASH] off")
        self.flashing = False

    def show_alert(self, message: str) -> None:
        self._write("!! Incoming Help Request !!")
        self._write(f"   {message}")
        self._write("   Press 'a' + Enter to acknowledge.")

    def show_listening(self, next_alert_in_seconds: Optional[int]) -> None:
        self._write("Listening for help requests...")
        if next_alert_in_seconds is not None:
            self._write(f"(Next mock alert in ~{next_alert_in_seconds}s)")


class VolunteerAlertSimulator:
    """
    Randomized mock alert loop.

    Args:
        feedback: device that renders vibration/flash and the alert text
        scheduler: anything with call_later(delay_seconds, callback) returning
            a handle with cancel(); normally the running asyncio loop
        rng: random.Random used for delays and alert choice
    """

    def __init__(
        self,
        feedback: FeedbackDevice,
        scheduler: Any = None,
        rng: Optional[random.Random] = None,
        min_delay_ms: int = MIN_DELAY_MS,
        max_delay_ms: int = MAX_DELAY_MS,
    ):
        if min_delay_ms < 0 or max_delay_ms < min_delay_ms:
            raise ValueError("Delay bounds must satisfy 0 <= min_delay_ms <= max_delay_ms")
        self.feedback = feedback
        self.scheduler = scheduler
        self.rng = rng or random.Random()
        self.min_delay_ms = min_delay_ms
        self.max_delay_ms = max_delay_ms

        self.state = SimulatorState.LISTENING
        self.active_alert: Optional[str] = None
        self.next_delay_ms: Optional[int] = None
        self._timer = None

    @property
    def upcoming_events(self) -> Sequence[str]:
        return UPCOMING_EVENTS

    @property
    def next_alert_in_seconds(self) -> Optional[int]:
        if self.next_delay_ms is None:
            return None
        return math.ceil(self.next_delay_ms / 1000)

    def _scheduler(self):
        if self.scheduler is None:
            import asyncio
            self.scheduler = asyncio.get_running_loop()
        return self.scheduler

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def start(self) -> int:
        return self.schedule_next_alert()

    def schedule_next_alert(self) -> int:
        """Arm the timer for a delay drawn from [min_delay_ms, max_delay_ms]; returns it."""
        self._cancel_timer()
        delay_ms = self.rng.randint(self.min_delay_ms, self.max_delay_ms)
        self.next_delay_ms = delay_ms
        self._timer = self._scheduler().call_later(delay_ms / 1000, self._on_timer)
        self.feedback.show_listening(self.next_alert_in_seconds)
        return delay_ms

    def _on_timer(self) -> None:
        self._timer = None
        self.trigger_alert()

    def trigger_alert(self) -> str:
        message = self.rng.choice(MOCK_ALERTS)
        self.active_alert = message
        self.state = SimulatorState.ALERTING
        self.feedback.vibrate(VIBRATION_PATTERN, repeat=True)
        self.feedback.start_flash(FLASH_STEP_MS)
        self.feedback.show_alert(message)
        logger.info(f"Mock alert fired: {message}")
        return message

    def acknowledge(self) -> bool:
        """Stop feedback and go back to listening. False when nothing is active."""
        if self.state != SimulatorState.ALERTING:
            return False
        self.feedback.cancel_vibration()
        self.feedback.stop_flash()
        self.active_alert = None
        self.state = SimulatorState.LISTENING
        self.schedule_next_alert()
        return True

    def simulate_alert(self) -> Optional[str]:
        """Fire immediately, only while listening."""
        if self.state != SimulatorState.LISTENING:
            return None
        self._cancel_timer()
        return self.trigger_alert()

    def stop(self) -> None:
        self._cancel_timer()
        self.feedback.cancel_vibration()
        self.feedback.stop_flash()
