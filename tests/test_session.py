"""
Tests for the live market session and its schedulers.

Uses a fake clock with the polling scheduler, so ticks happen only when a
test advances time and calls run_pending().
"""

import asyncio

import pytest

from mandi import MarketSession
from mandi.market import district_seed, synthesize_dataset
from mandi.scheduling import AsyncioScheduler


@pytest.fixture
def session(cfg, scheduler, rng):
    s = MarketSession(cfg, scheduler=scheduler, rng=rng)
    yield s
    s.dispose()


def _tick(clock, scheduler, seconds=3.0):
    clock.advance(seconds)
    return scheduler.run_pending()


class TestMarketSession:
    def test_stopped_until_selected(self, session, scheduler):
        assert not session.running
        assert session.district is None
        assert session.get_view() == []
        assert scheduler.pending == 0

    def test_select_synthesizes_from_district(self, session, cfg):
        session.select_region("Bargarh")
        expected = synthesize_dataset(district_seed("Bargarh"), cfg.catalog.crops)
        assert session.records() == expected
        assert session.running
        assert session.district == "Bargarh"

    def test_ticks_every_interval(self, session, clock, scheduler):
        session.select_region("Bargarh")
        _tick(clock, scheduler, 2.5)
        assert session.ticks == 0
        _tick(clock, scheduler, 0.5)
        assert session.ticks == 1
        _tick(clock, scheduler, 6.0)
        assert session.ticks == 3

    def test_bounds_after_ticks(self, session, clock, scheduler):
        session.select_region("Cuttack")
        for _ in range(100):
            _tick(clock, scheduler)
        for r in session.records():
            assert r.price >= 500
            assert 0 <= r.demand <= 100
            assert 0 <= r.supply <= 100

    def test_region_switch_resets(self, session, clock, scheduler, cfg):
        session.select_region("Bargarh")
        for _ in range(5):
            _tick(clock, scheduler)

        session.select_region("Cuttack")
        assert session.records() == synthesize_dataset(district_seed("Cuttack"), cfg.catalog.crops)
        assert session.ticks == 0
        assert scheduler.pending == 1

        _tick(clock, scheduler)
        assert session.ticks == 1

    def test_reselecting_same_district_keeps_feed(self, session, clock, scheduler):
        session.select_region("Bargarh")
        _tick(clock, scheduler)
        before = session.records()

        session.select_region("Bargarh")
        assert session.ticks == 1
        assert session.records() == before
        assert scheduler.pending == 1

    def test_dispose_stops_mutation(self, session, clock, scheduler):
        session.select_region("Bargarh")
        records = session._records
        snapshot = session.records()

        session.dispose()
        assert not session.running
        assert scheduler.pending == 0
        assert _tick(clock, scheduler) == 0
        assert records == snapshot
        assert session.get_view() == []

    def test_records_are_copies(self, session):
        session.select_region("Bargarh")
        session.records()[0].price = 1
        assert session.records()[0].price != 1

    def test_select_state_picks_default_district(self, session, scheduler):
        session.select_region("Bargarh")
        session.select_state("Punjab")
        assert session.selection.state == "Punjab"
        assert session.district == "Ludhiana"
        assert scheduler.pending == 1

    def test_select_unknown_state(self, session):
        session.select_region("Bargarh")
        with pytest.raises(ValueError, match="Unknown state"):
            session.select_state("Atlantis")
        assert session.district == "Bargarh"

    def test_get_view(self, session):
        session.select_region("Bargarh")
        view = session.get_view("TOM", "price")
        assert [r.name for r in view] == ["Tomato"]


class TestPollingScheduler:
    def test_fires_once_per_interval(self, clock, scheduler):
        calls = []
        scheduler.call_every(1.0, lambda: calls.append(clock()))
        clock.advance(0.5)
        assert scheduler.run_pending() == 0
        clock.advance(0.5)
        assert scheduler.run_pending() == 1
        clock.advance(3.0)
        assert scheduler.run_pending() == 3
        assert len(calls) == 4

    def test_cancel(self, clock, scheduler):
        calls = []
        handle = scheduler.call_every(1.0, lambda: calls.append(1))
        handle.cancel()
        handle.cancel()
        clock.advance(5.0)
        assert scheduler.run_pending() == 0
        assert calls == []
        assert not handle.active

    def test_cancel_from_callback(self, clock, scheduler):
        calls = []
        handle = None

        def _once():
            calls.append(1)
            handle.cancel()

        handle = scheduler.call_every(1.0, _once)
        clock.advance(10.0)
        scheduler.run_pending()
        assert calls == [1]

    def test_rejects_bad_interval(self, scheduler):
        with pytest.raises(ValueError):
            scheduler.call_every(0, lambda: None)


class TestAsyncioScheduler:
    def test_repeats_until_cancelled(self):
        async def run():
            calls = []
            handle = AsyncioScheduler().call_every(0.01, lambda: calls.append(1))
            await asyncio.sleep(0.08)
            assert handle.active
            handle.cancel()
            seen = len(calls)
            await asyncio.sleep(0.05)
            return seen, len(calls), handle.active

        seen, after, active = asyncio.run(run())
        assert seen >= 2
        assert after == seen
        assert not active

    def test_drives_session(self, cfg, rng):
        cfg.ticker.interval_seconds = 0.01

        async def run():
            session = MarketSession(cfg, scheduler=AsyncioScheduler(), rng=rng)
            session.select_region("Nashik")
            await asyncio.sleep(0.08)
            session.dispose()
            ticks = session.ticks
            await asyncio.sleep(0.03)
            return ticks, session.ticks

        ticks, after = asyncio.run(run())
        assert ticks >= 2
        assert after == ticks
