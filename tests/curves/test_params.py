from __future__ import annotations

import logging
import math

import numpy as np
import pytest

from curves.params import (
    AnimationClock,
    CurveParameters,
    InvalidParameter,
    ParameterState,
    ParameterUpdate,
    sanitize_parameters,
    validate_parameters,
)


def test_defaults() -> None:
    p = CurveParameters()
    assert p.as_dict() == {
        "amplitude_x": 610.0,
        "amplitude_y": 580.0,
        "frequency_x": 52.0,
        "frequency_y": 51.0,
        "phase_x": 0.0,
        "phase_y": 0.0,
        "detail": 500,
    }


def test_parameters_are_frozen() -> None:
    p = CurveParameters()
    with pytest.raises(AttributeError):
        p.detail = 3  # type: ignore[misc]


def test_replace_values_returns_new_instance() -> None:
    p = CurveParameters()
    q = p.replace_values({"frequency_x": 3, "detail": 12.0})
    assert q is not p
    assert q.frequency_x == 3.0
    assert q.detail == 12 and isinstance(q.detail, int)
    assert p.detail == 500


def test_replace_values_unknown_id_raises() -> None:
    with pytest.raises(KeyError):
        CurveParameters().replace_values({"zoom": 2.0})


def test_from_mapping_ignores_unknown_and_fills_defaults() -> None:
    p = CurveParameters.from_mapping({"detail": 20, "unknown": 1})
    assert p.detail == 20
    assert p.amplitude_x == 610.0
    assert CurveParameters.from_mapping(None) == CurveParameters()


def test_validate_accepts_defaults() -> None:
    validate_parameters(CurveParameters())


@pytest.mark.parametrize(
    "values",
    [
        {"amplitude_x": math.nan},
        {"frequency_y": math.inf},
        {"phase_x": -math.inf},
    ],
)
def test_validate_rejects_non_finite(values: dict) -> None:
    with pytest.raises(InvalidParameter):
        validate_parameters(CurveParameters().replace_values(values))


def test_validate_rejects_negative_detail() -> None:
    with pytest.raises(InvalidParameter):
        validate_parameters(CurveParameters(detail=-1))


def test_invalid_parameter_is_value_error() -> None:
    assert issubclass(InvalidParameter, ValueError)


def test_sanitize_returns_same_object_when_valid() -> None:
    p = CurveParameters()
    assert sanitize_parameters(p) is p


def test_sanitize_clamps_and_logs(caplog: pytest.LogCaptureFixture) -> None:
    p = CurveParameters().replace_values(
        {
            "amplitude_x": math.nan,
            "frequency_x": math.inf,
            "phase_y": -math.inf,
            "detail": -5,
        }
    )
    with caplog.at_level(logging.WARNING, logger="curves.params"):
        q = sanitize_parameters(p)
    assert q.amplitude_x == 610.0
    assert q.frequency_x == 100.0
    assert q.phase_y == 0.0
    assert q.detail == 0
    validate_parameters(q)
    assert sum("invalid curve parameter" in r.message for r in caplog.records) == 4


def test_sanitize_non_finite_detail() -> None:
    q = sanitize_parameters(CurveParameters().replace_values({"detail": math.inf}))
    assert q.detail == 5000 and isinstance(q.detail, int)


def test_animation_clock_accumulates_and_ignores_negative() -> None:
    clock = AnimationClock()
    clock.tick(0.5)
    clock.tick(0.25)
    clock.tick(-1.0)
    clock.tick(math.nan)
    assert clock.elapsed == pytest.approx(0.75)


def test_animation_clock_set_elapsed_never_goes_back() -> None:
    clock = AnimationClock(2.0)
    clock.set_elapsed(1.0)
    assert clock.elapsed == 2.0
    clock.set_elapsed(3.5)
    assert clock.elapsed == 3.5


def test_apply_updates_returns_changed_ids(default_state: ParameterState) -> None:
    changed = default_state.apply_updates(
        [
            ParameterUpdate("detail", 10),
            ParameterUpdate("amplitude_x", 610.0),  # 変化なし
        ]
    )
    assert changed == ["detail"]
    assert default_state.params.detail == 10


def test_apply_updates_last_value_wins(default_state: ParameterState) -> None:
    default_state.apply_updates(
        [ParameterUpdate("frequency_x", 1.0), ParameterUpdate("frequency_x", 7.0)]
    )
    assert default_state.params.frequency_x == 7.0


def test_apply_updates_skips_unknown_ids(
    default_state: ParameterState, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING, logger="curves.params"):
        changed = default_state.apply_updates(
            [ParameterUpdate("zoom", 2.0), ParameterUpdate("phase_x", 1.5)]
        )
    assert changed == ["phase_x"]
    assert any("zoom" in r.message for r in caplog.records)


def test_apply_updates_repairs_invalid_values(default_state: ParameterState) -> None:
    default_state.apply_updates([ParameterUpdate("amplitude_y", math.inf)])
    assert default_state.params.amplitude_y == 1000.0


def test_apply_updates_empty_is_noop(default_state: ParameterState) -> None:
    before = default_state.params
    assert default_state.apply_updates([]) == []
    assert default_state.params is before


def test_effective_phases_include_elapsed_time() -> None:
    state = ParameterState(params=CurveParameters(phase_x=1.0, phase_y=2.0))
    state.clock.tick(0.5)
    assert state.time == 0.5
    assert state.effective_phases() == (1.5, 2.5)


def test_validate_accepts_numpy_integer_detail() -> None:
    validate_parameters(CurveParameters(detail=np.int64(10)))
    with pytest.raises(InvalidParameter):
        validate_parameters(CurveParameters(detail=np.int64(-1)))
