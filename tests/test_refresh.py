"""Tests for fetch groups and the periodic refresh loop."""

import asyncio
import logging

import pytest

from heliodash.refresh import FetchResult, PeriodicRefresh, gather_all, gather_best_effort


async def _value(v, delay=0.0):
    await asyncio.sleep(delay)
    return v


async def _fail(exc, delay=0.0):
    await asyncio.sleep(delay)
    raise exc


class TestGatherAll:
    def test_results_in_argument_order(self):
        async def scenario():
            return await gather_all(_value("a", 0.02), _value("b"), _value("c", 0.01))

        assert asyncio.run(scenario()) == ["a", "b", "c"]

    def test_empty(self):
        assert asyncio.run(gather_all()) == []

    def test_first_failure_cancels_rest(self):
        cancelled = []

        async def slow():
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.append(True)
                raise

        async def scenario():
            await gather_all(slow(), _fail(ValueError("boom"), 0.01))

        with pytest.raises(ValueError, match="boom"):
            asyncio.run(scenario())
        assert cancelled == [True]


class TestGatherBestEffort:
    def test_failures_isolated(self, caplog):
        async def scenario():
            return await gather_best_effort(
                good=_value(1),
                bad=_fail(RuntimeError("nope")),
            )

        with caplog.at_level(logging.WARNING, logger="heliodash.refresh._groups"):
            results = asyncio.run(scenario())

        assert list(results) == ["good", "bad"]
        assert results["good"].ok
        assert results["good"].value == 1
        assert not results["bad"].ok
        assert isinstance(results["bad"].error, RuntimeError)
        assert "bad" in caplog.text

    def test_non_exception_base_exceptions_propagate(self):
        class Abort(BaseException):
            pass

        async def scenario():
            return await gather_best_effort(
                good=_value(1),
                aborted=_fail(Abort()),
            )

        with pytest.raises(Abort):
            asyncio.run(scenario())

    def test_unwrap(self):
        assert FetchResult(value=3).unwrap() == 3
        with pytest.raises(KeyError):
            FetchResult(error=KeyError("x")).unwrap()


class TestPeriodicRefresh:
    def test_refresh_now_applies(self):
        applied = []

        async def scenario():
            refresh = PeriodicRefresh(lambda: _value(42), applied.append, interval=60)
            return await refresh.refresh_now()

        assert asyncio.run(scenario()) is True
        assert applied == [42]

    def test_stale_result_discarded_after_stop(self):
        applied = []

        async def scenario():
            refresh = PeriodicRefresh(lambda: _value("late", 0.02), applied.append, interval=60)
            cycle = asyncio.ensure_future(refresh.refresh_now())
            await asyncio.sleep(0)
            refresh.stop()
            return await cycle

        assert asyncio.run(scenario()) is False
        assert applied == []

    def test_error_routed_and_state_kept(self):
        applied, errors = [], []

        async def scenario():
            refresh = PeriodicRefresh(
                lambda: _fail(RuntimeError("down")),
                applied.append,
                interval=60,
                on_error=errors.append,
            )
            return await refresh.refresh_now()

        assert asyncio.run(scenario()) is False
        assert applied == []
        assert [str(e) for e in errors] == ["down"]

    def test_start_runs_periodically_until_stopped(self):
        applied = []

        async def scenario():
            counter = iter(range(100))
            refresh = PeriodicRefresh(lambda: _value(next(counter)), applied.append, interval=0.01)
            refresh.start()
            assert refresh.running
            await asyncio.sleep(0.055)
            refresh.stop()
            assert not refresh.running
            seen = len(applied)
            await asyncio.sleep(0.03)
            return seen

        seen = asyncio.run(scenario())
        assert seen >= 2
        assert len(applied) == seen
        assert applied[:2] == [0, 1]

    def test_stop_bumps_generation(self):
        refresh = PeriodicRefresh(lambda: _value(1), lambda _: None, interval=1)
        before = refresh.generation
        refresh.stop()
        assert refresh.generation == before + 1

    def test_rejects_non_positive_interval(self):
        with pytest.raises(ValueError, match="interval"):
            PeriodicRefresh(lambda: _value(1), lambda _: None, interval=0)

    def test_loop_survives_failing_apply(self, caplog):
        loads = []

        async def load():
            loads.append(len(loads))
            return loads[-1]

        def apply(result):
            if result == 0:
                raise RuntimeError("bad render")

        async def scenario():
            refresh = PeriodicRefresh(load, apply, interval=0.01)
            refresh.start()
            for _ in range(50):
                await asyncio.sleep(0.01)
                if len(loads) >= 2:
                    break
            running = refresh.running
            refresh.stop()
            return running

        with caplog.at_level(logging.WARNING, logger="heliodash.refresh._periodic"):
            assert asyncio.run(scenario()) is True
        assert len(loads) >= 2
        assert "bad render" in caplog.text
