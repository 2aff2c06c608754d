"""Tests for scalar geometry helpers."""

from __future__ import annotations

import pytest

from point_plotter.utils.geometry import rescale, round_half_up


class TestRescale:
    def test_endpoints(self) -> None:
        assert rescale(0.0, 0.0, 50.0, 10.0, 210.0) == pytest.approx(10.0)
        assert rescale(50.0, 0.0, 50.0, 10.0, 210.0) == pytest.approx(210.0)

    def test_midpoint(self) -> None:
        assert rescale(25.0, 0.0, 50.0, 10.0, 210.0) == pytest.approx(110.0)

    def test_linear(self) -> None:
        a = rescale(10.0, 0.0, 40.0, 0.0, 100.0)
        b = rescale(20.0, 0.0, 40.0, 0.0, 100.0)
        assert b == pytest.approx(2 * a)

    def test_no_clamping(self) -> None:
        assert rescale(-10.0, 0.0, 50.0, 10.0, 210.0) == pytest.approx(-30.0)
        assert rescale(100.0, 0.0, 50.0, 10.0, 210.0) == pytest.approx(410.0)

    def test_inverted_target(self) -> None:
        assert rescale(0.0, 0.0, 1.0, 100.0, 0.0) == pytest.approx(100.0)

    def test_empty_source_range(self) -> None:
        with pytest.raises(ZeroDivisionError):
            rescale(1.0, 5.0, 5.0, 0.0, 100.0)


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value, expected",
        [(0.0, 0), (0.49, 0), (0.5, 1), (2.5, 3), (3.5, 4), (7.4, 7), (150.0, 150)],
    )
    def test_values(self, value: float, expected: int) -> None:
        assert round_half_up(value) == expected

    def test_differs_from_builtin_round(self) -> None:
        assert round(2.5) == 2
        assert round_half_up(2.5) == 3
