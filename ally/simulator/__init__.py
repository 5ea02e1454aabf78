"""
Volunteer alert simulator - offline stand-in for the volunteer dashboard.

Fires randomized mock help requests and drives haptic/visual feedback.
It never talks to the backend.
"""

from ally.simulator.alert_simulator import (
    ConsoleFeedbackDevice,
    FeedbackDevice,
    SimulatorState,
    VolunteerAlertSimulator,
)

__all__ = [
    "ConsoleFeedbackDevice",
    "FeedbackDevice",
    "SimulatorState",
    "VolunteerAlertSimulator",
]
