"""
Terminal runner for the volunteer alert simulator.

Usage:
  python scripts/run_alert_simulator.py [--min-delay 15] [--max-delay 30] [--seed N]

Commands (type + Enter):
  s  simulate an alert now (only while listening)
  a  acknowledge the active alert
  e  list upcoming volunteer events
  q  quit
"""

import argparse
import asyncio
import random

from ally.simulator import ConsoleFeedbackDevice, VolunteerAlertSimulator


async def run(min_delay_s: float, max_delay_s: float, seed: int = None):
    loop = asyncio.get_running_loop()
    simulator = VolunteerAlertSimulator(
        ConsoleFeedbackDevice(),
        scheduler=loop,
        rng=random.Random(seed),
        min_delay_ms=int(min_delay_s * 1000),
        max_delay_ms=int(max_delay_s * 1000),
    )

    print("Volunteer Dashboard - Accessibility Assistance")
    simulator.start()

    try:
        while True:
            command = (await loop.run_in_executor(None, input)).strip().lower()
            if command == "q":
                break
            if command == "s":
                if simulator.simulate_alert() is None:
                    print("An alert is already active.")
            elif command == "a":
                if not simulator.acknowledge():
                    print("No active alert.")
            elif command == "e":
                print("Upcoming Volunteer Events")
                for event in simulator.upcoming_events:
                    print(f"  - {event}")
    except EOFError:
        pass
    finally:
        simulator.stop()


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--min-delay", type=float, default=15, help="Minimum seconds between mock alerts")
    parser.add_argument("--max-delay", type=float, default=30, help="Maximum seconds between mock alerts")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible runs")
    args = parser.parse_args()

    asyncio.run(run(args.min_delay, args.max_delay, args.seed))


if __name__ == "__main__":
    main()
