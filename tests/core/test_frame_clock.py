from __future__ import annotations

from engine.core.frame_clock import FrameClock


class _Recorder:
    def __init__(self, name: str, log: list[tuple[str, float]]) -> None:
        self.name = name
        self.log = log

    def tick(self, dt: float) -> None:
        self.log.append((self.name, dt))


def test_ticks_in_registration_order() -> None:
    log: list[tuple[str, float]] = []
    clock = FrameClock([_Recorder("a", log), _Recorder("b", log), _Recorder("c", log)])
    clock.tick(0.016)
    assert [name for name, _ in log] == ["a", "b", "c"]
    assert all(dt == 0.016 for _, dt in log)
    assert clock.frame_count == 1


def test_negative_dt_is_clamped_to_zero() -> None:
    log: list[tuple[str, float]] = []
    clock = FrameClock([_Recorder("a", log)])
    clock.tick(-0.5)
    assert log == [("a", 0.0)]


def test_measures_dt_when_not_given() -> None:
    log: list[tuple[str, float]] = []
    clock = FrameClock([_Recorder("a", log)])
    clock.tick()
    clock.tick()
    assert len(log) == 2
    assert all(dt >= 0.0 for _, dt in log)
    assert clock.frame_count == 2


def test_empty_clock_still_counts_frames() -> None:
    clock = FrameClock([])
    for _ in range(3):
        clock.tick(0.1)
    assert clock.frame_count == 3
