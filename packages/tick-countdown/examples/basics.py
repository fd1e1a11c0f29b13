"""Countdown basics -- a timer driven by a virtual clock.

Demonstrates:
- Injecting a ManualScheduler so time only moves when told to
- start / pause / resume / reset and the accessors
- Auto-stop when the countdown reaches zero

Run: python -m examples.basics
"""

from tick_countdown import CountdownTimer, ManualScheduler


def show(label: str, timer: CountdownTimer) -> None:
    print(f"  {label:<22} remaining={timer.remaining_time:>2}  state={timer.state.name}")


def main() -> None:
    print("=== Countdown Basics ===\n")

    scheduler = ManualScheduler()
    timer = CountdownTimer(scheduler)

    timer.start(10)
    show("start(10)", timer)

    # Three virtual seconds pass.
    scheduler.advance(3000)
    show("after 3s", timer)

    timer.pause()
    scheduler.advance(5000)
    show("paused, 5s later", timer)

    timer.resume()
    scheduler.advance(1000)
    show("resumed, 1s later", timer)

    timer.reset()
    show("reset()", timer)

    timer.start(2)
    scheduler.advance(5000)
    show("start(2), 5s later", timer)

    print(f"\nDone. finished={timer.is_finished()} at virtual t={scheduler.now_ms}ms.")


if __name__ == "__main__":
    main()
