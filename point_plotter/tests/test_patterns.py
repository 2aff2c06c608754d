"""Tests for point pattern generators."""

from __future__ import annotations

import pytest

from point_plotter.patterns import corners, grid, parse_grid_spec


class TestGrid:
    def test_count(self) -> None:
        assert len(grid(4, 3, 30.0, 20.0)) == 12

    def test_boustrophedon(self) -> None:
        pts = grid(3, 2, 20.0, 10.0)
        assert pts == [
            (0.0, 0.0), (10.0, 0.0), (20.0, 0.0),
            (20.0, 10.0), (10.0, 10.0), (0.0, 10.0),
        ]

    def test_margin(self) -> None:
        pts = grid(2, 2, 100.0, 50.0, margin=5.0)
        xs = {x for x, _ in pts}
        ys = {y for _, y in pts}
        assert xs == {5.0, 95.0}
        assert ys == {5.0, 45.0}

    def test_single_point(self) -> None:
        assert grid(1, 1, 100.0, 100.0, margin=10.0) == [(10.0, 10.0)]

    def test_rejects_zero_dimension(self) -> None:
        with pytest.raises(ValueError, match="at least 1x1"):
            grid(0, 3, 10.0, 10.0)

    def test_rejects_oversized_margin(self) -> None:
        with pytest.raises(ValueError, match="leaves no room"):
            grid(2, 2, 10.0, 10.0, margin=6.0)


class TestCorners:
    def test_counter_clockwise(self) -> None:
        assert corners(10.0, 5.0) == [
            (0.0, 0.0), (10.0, 0.0), (10.0, 5.0), (0.0, 5.0),
        ]


class TestParseGridSpec:
    @pytest.mark.parametrize(
        "spec, expected",
        [("10x5", (10, 5)), ("3X3", (3, 3)), (" 2 x 7 ", (2, 7))],
    )
    def test_valid(self, spec: str, expected: tuple[int, int]) -> None:
        assert parse_grid_spec(spec) == expected

    @pytest.mark.parametrize("spec", ["", "10", "10x", "x5", "a x b", "2x-1"])
    def test_malformed(self, spec: str) -> None:
        with pytest.raises(ValueError, match="COLSxROWS"):
            parse_grid_spec(spec)

    def test_zero(self) -> None:
        with pytest.raises(ValueError, match="at least 1x1"):
            parse_grid_spec("0x4")
