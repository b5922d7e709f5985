"""Tests for TrajectoryAssembler batch behaviour."""

from __future__ import annotations

import logging
import threading

import httpx
import pytest

from horizonsjax.horizons import (
    DecodeMode,
    EphemerisLayout,
    HorizonsClient,
    QueryWindow,
    RateLimitConfig,
)
from horizonsjax.trajectory import TrajectoryAssembler


def _result(ra_hours: int) -> str:
    return (
        "header\n$$SOE\n"
        f" 2023-Jan-01 00:00     {ra_hours:02d} 00 00.00 +10 00 00.0\n"
        f" 2023-Jan-02 00:00     {ra_hours:02d} 04 00.00 +10 30 00.0\n"
        "$$EOE\nfooter\n"
    )


def _designator(request: httpx.Request) -> str:
    return request.url.params["COMMAND"].removeprefix("'DES=").removesuffix(";'")


def _client(failing: set[str] | None = None, empty: set[str] | None = None) -> HorizonsClient:
    failing = failing or set()
    empty = empty or set()
    lock = threading.Lock()
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        des = _designator(request)
        with lock:
            calls.append(des)
        if des in failing:
            return httpx.Response(500, json={"error": "boom"})
        if des in empty:
            return httpx.Response(200, json={"result": "no table here"})
        return httpx.Response(200, json={"result": _result(int(des) % 24)})

    client = HorizonsClient(
        transport=httpx.MockTransport(handler), rate_limit=RateLimitConfig.disabled()
    )
    client.calls = calls  # type: ignore[attr-defined]
    return client


class TestTrajectoryAssemblerConstruction:
    def test_defaults(self):
        assembler = TrajectoryAssembler(_client())
        assert assembler.mode == DecodeMode.SEXAGESIMAL
        assert assembler.max_workers == 1

    def test_mode_from_string(self):
        assert TrajectoryAssembler(_client(), mode="decimal").mode == DecodeMode.DECIMAL

    def test_invalid_workers(self):
        with pytest.raises(ValueError, match="max_workers"):
            TrajectoryAssembler(_client(), max_workers=0)

    def test_invalid_mode(self):
        with pytest.raises(ValueError, match="Unknown decode mode"):
            TrajectoryAssembler(_client(), mode="polar")


class TestFetchTrajectory:
    def test_single(self):
        assembler = TrajectoryAssembler(_client())
        t = assembler.fetch_trajectory(QueryWindow("6", "2023-01-01", "2023-01-02"))
        assert t is not None
        assert t.designator == "6"
        assert t.dates == ("2023-Jan-01", "2023-Jan-02")
        # RA 6h on the first row
        assert float(t.y[0]) > 0.98

    def test_layout_time_fields_reach_trajectory_dates(self):
        layout = EphemerisLayout(time_fields=(0, 1))
        assembler = TrajectoryAssembler(_client(), layout=layout)
        t = assembler.fetch_trajectory(QueryWindow("6", "2023-01-01", "2023-01-02"))
        assert t is not None
        assert t.dates == ("2023-Jan-01 00:00", "2023-Jan-02 00:00")

    def test_failed_fetch_returns_none(self):
        assembler = TrajectoryAssembler(_client(failing={"6"}))
        assert assembler.fetch_trajectory(QueryWindow("6", "2023-01-01", "2023-01-02")) is None

    def test_empty_table_returns_none(self, caplog):
        assembler = TrajectoryAssembler(_client(empty={"6"}))
        with caplog.at_level(logging.ERROR):
            t = assembler.fetch_trajectory(QueryWindow("6", "2023-01-01", "2023-01-02"))
        assert t is None
        assert "No ephemeris rows" in caplog.text


class TestAssemble:
    def test_all_succeed_in_order(self):
        client = _client()
        trajectories = TrajectoryAssembler(client).assemble(
            ["1", "2", "3"], "2023-01-01", "2023-01-02"
        )
        assert [t.designator for t in trajectories] == ["1", "2", "3"]
        assert client.calls == ["1", "2", "3"]

    def test_failed_designator_is_skipped(self, caplog):
        client = _client(failing={"2"})
        with caplog.at_level(logging.ERROR):
            trajectories = TrajectoryAssembler(client).assemble(
                ["1", "2", "3"], "2023-01-01", "2023-01-02"
            )
        assert [t.designator for t in trajectories] == ["1", "3"]
        assert "2" in caplog.text

    def test_all_fail_returns_empty(self, caplog):
        client = _client(failing={"1", "2"})
        with caplog.at_level(logging.ERROR):
            trajectories = TrajectoryAssembler(client).assemble(
                ["1", "2"], "2023-01-01", "2023-01-02"
            )
        assert trajectories == []
        assert "No trajectories assembled" in caplog.text

    def test_blank_designators_ignored(self):
        client = _client()
        trajectories = TrajectoryAssembler(client).assemble(
            ["", " 4 ", "   "], "2023-01-01", "2023-01-02"
        )
        assert [t.designator for t in trajectories] == ["4"]
        assert client.calls == ["4"]

    def test_no_designators(self):
        assert TrajectoryAssembler(_client()).assemble([], "2023-01-01", "2023-01-02") == []

    def test_invalid_window_raises(self):
        with pytest.raises(ValueError, match="after stop_time"):
            TrajectoryAssembler(_client()).assemble(["1"], "2023-06-01", "2023-01-01")

    def test_step_size_forwarded(self):
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.params["STEP_SIZE"])
            return httpx.Response(200, json={"result": _result(1)})

        client = HorizonsClient(
            transport=httpx.MockTransport(handler), rate_limit=RateLimitConfig.disabled()
        )
        TrajectoryAssembler(client).assemble(["1"], "2023-01-01", "2023-01-02", "6 h")
        assert seen == ["6 h"]

    def test_parallel_keeps_input_order(self):
        client = _client(failing={"5"})
        designators = [str(i) for i in range(1, 11)]
        trajectories = TrajectoryAssembler(client, max_workers=4).assemble(
            designators, "2023-01-01", "2023-01-02"
        )
        expected = [d for d in designators if d != "5"]
        assert [t.designator for t in trajectories] == expected
        assert sorted(client.calls, key=int) == designators

    def test_unit_vectors(self):
        trajectories = TrajectoryAssembler(_client()).assemble(
            ["1", "7", "13"], "2023-01-01", "2023-01-02"
        )
        for t in trajectories:
            for p in t.points:
                assert abs((p.x**2 + p.y**2 + p.z**2) ** 0.5 - 1.0) < 1e-9
