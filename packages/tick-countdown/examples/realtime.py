"""Real-time countdown on a wall-clock scheduler.

Run: python -m examples.realtime
"""

import logging
import time

from tick_countdown import CountdownTimer, ThreadingScheduler


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    print("=== Real-time Countdown ===\n")

    with ThreadingScheduler() as scheduler:
        timer = CountdownTimer(scheduler)
        timer.start(3)
        last = None
        while timer.is_running():
            if timer.remaining_time != last:
                last = timer.remaining_time
                print(f"  {last}...")
            time.sleep(0.05)

    print("\nLiftoff.")


if __name__ == "__main__":
    main()
