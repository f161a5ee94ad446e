from __future__ import annotations

from param_harvester.engine import ThreadPoolManager


def test_uncapped_pool_gives_one_worker_per_target() -> None:
    manager = ThreadPoolManager()
    assert manager.workers_for(0) == 1
    assert manager.workers_for(1) == 1
    assert manager.workers_for(250) == 250


def test_cap_bounds_fan_out() -> None:
    manager = ThreadPoolManager(max_workers=4)
    assert manager.workers_for(2) == 2
    assert manager.workers_for(50) == 4


def test_executors_are_tracked_and_shut_down() -> None:
    manager = ThreadPoolManager(max_workers=2)
    executor = manager.executor(10)
    assert executor.submit(lambda: 21 * 2).result() == 42
    manager.shutdown()
    assert executor._shutdown  # noqa: SLF001
