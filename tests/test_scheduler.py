import asyncio

from engine import AsyncioScheduler, PolledScheduler, VirtualScheduler


def test_virtual_fires_in_due_then_insertion_order() -> None:
    sched = VirtualScheduler()
    fired = []
    sched.schedule_after(20, lambda: fired.append("late"))
    sched.schedule_after(10, lambda: fired.append("a"))
    sched.schedule_after(10, lambda: fired.append("b"))

    assert sched.advance(9) == 0
    assert sched.advance(1) == 2
    assert fired == ["a", "b"]
    assert sched.now == 10
    assert sched.pending == 1


def test_virtual_cancelled_handles_never_fire() -> None:
    sched = VirtualScheduler()
    fired = []
    handle = sched.schedule_after(5, lambda: fired.append("x"))
    sched.cancel(handle)
    sched.cancel(None)

    assert sched.pending == 0
    assert sched.advance(100) == 0
    assert fired == []


def test_virtual_runs_callbacks_scheduled_while_advancing() -> None:
    sched = VirtualScheduler()
    times = []

    def tick():
        times.append(sched.now)
        if len(times) < 3:
            sched.schedule_after(10, tick)

    sched.schedule_after(0, tick)
    sched.advance(25)

    assert times == [0, 10, 20]
    assert sched.now == 25
    assert sched.pending == 0


def test_virtual_run_all_drains_chains() -> None:
    sched = VirtualScheduler(start_ms=100)
    count = []

    def tick():
        count.append(1)
        if len(count) < 5:
            sched.schedule_after(1000, tick)

    sched.schedule_after(1000, tick)
    assert sched.run_all() == 5
    assert sched.now == 5100


def test_polled_scheduler_follows_the_clock() -> None:
    clock = [1.0]
    sched = PolledScheduler(clock=lambda: clock[0])
    fired = []
    sched.schedule_after(500, lambda: fired.append("x"))

    assert sched.pump() == 0
    clock[0] = 1.4
    assert sched.pump() == 0
    clock[0] = 1.5
    assert sched.pump() == 1
    assert fired == ["x"]


def test_asyncio_scheduler_fires_and_cancels() -> None:
    fired = []

    async def main():
        sched = AsyncioScheduler()
        sched.schedule_after(1, lambda: fired.append("a"))
        handle = sched.schedule_after(1, lambda: fired.append("b"))
        sched.cancel(handle)
        await asyncio.sleep(0.05)

    asyncio.run(main())
    assert fired == ["a"]


def test_polled_scheduler_catches_up_on_chained_callbacks() -> None:
    clock = [1.0]
    sched = PolledScheduler(clock=lambda: clock[0])
    times = []

    def tick():
        times.append(sched.now)
        sched.schedule_after(20, tick)

    sched.schedule_after(0, tick)
    clock[0] = 1.125

    assert sched.pump() == 7
    assert times == [1000, 1020, 1040, 1060, 1080, 1100, 1120]
    assert sched.pending == 1


def test_polled_scheduler_anchors_outside_callbacks_to_the_clock() -> None:
    clock = [2.0]
    sched = PolledScheduler(clock=lambda: clock[0])
    clock[0] = 3.0
    handle = sched.schedule_after(10, lambda: None)
    assert handle.due == 3010
