"""Tests for thread isolation and concurrent memoization."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from fnwire import Container, LockMode, declare, run
from fnwire.injectable import Injectable


class TestAmbientIsolation:
    def test_threads_do_not_see_each_others_scopes(self) -> None:
        service = declare("service")
        barrier = threading.Barrier(2)
        results: dict[str, Any] = {}
        errors: list[Exception] = []

        def worker(label: str) -> None:
            def body() -> str:
                barrier.wait()
                return service()

            try:
                results[label] = run(body, [service.impl(lambda _: label)])
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(label,)) for label in ("a", "b")]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        assert results == {"a": "a", "b": "b"}


class TestConcurrentMemoization:
    def test_thread_lock_mode_invokes_handler_once_per_key(self) -> None:
        calls: list[int] = []
        service = Injectable("slow")

        def handler(n: int) -> object:
            calls.append(n)
            time.sleep(0.01)
            return object()

        container = Container(lock_mode=LockMode.THREAD)
        container.install([service.impl(handler)])

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda _: container.get(service, 1), range(16)))

        assert calls == [1]
        assert all(result is results[0] for result in results)

    def test_thread_lock_mode_keeps_distinct_keys_isolated(self) -> None:
        service = Injectable("service")
        container = Container(lock_mode=LockMode.THREAD)
        container.install([service.impl(lambda n: object())])

        with ThreadPoolExecutor(max_workers=4) as executor:
            results = list(executor.map(lambda n: container.get(service, n % 4), range(32)))

        unique_instances = {id(r) for r in results}
        assert len(unique_instances) == 4

    def test_cross_resolving_handlers_do_not_deadlock(self) -> None:
        service_x = Injectable("X")
        service_y = Injectable("Y")
        container = Container()
        barrier = threading.Barrier(2)
        results: dict[str, Any] = {}
        errors: list[Exception] = []

        def x_handler(n: int) -> str:
            time.sleep(0.05)
            return f"x{n}" + (container.get(service_y, n) if n == 1 else "")

        def y_handler(n: int) -> str:
            time.sleep(0.05)
            return f"y{n}" + (container.get(service_x, n) if n == 2 else "")

        container.install([service_x.impl(x_handler), service_y.impl(y_handler)])

        def worker(label: str, injectable: Injectable[str, int], n: int) -> None:
            try:
                barrier.wait()
                results[label] = container.get(injectable, n)
            except Exception as e:
                errors.append(e)

        threads = [
            threading.Thread(target=worker, args=("a", service_x, 1), daemon=True),
            threading.Thread(target=worker, args=("b", service_y, 2), daemon=True),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        assert not any(t.is_alive() for t in threads)
        assert not errors
        assert results == {"a": "x1y1", "b": "y2x2"}

    def test_concurrent_default_handler_resolution_memoizes_once(self) -> None:
        for _ in range(20):
            calls: list[int] = []

            def handler(n: int, calls: list[int] = calls) -> object:
                calls.append(n)
                time.sleep(0.001)
                return object()

            service = Injectable("lazy", default_handler=handler)
            container = Container()
            barrier = threading.Barrier(8)

            def resolve(
                _: int,
                service: Injectable[object, int] = service,
                container: Container = container,
                barrier: threading.Barrier = barrier,
            ) -> object:
                barrier.wait()
                return container.get(service, 1)

            with ThreadPoolExecutor(max_workers=8) as executor:
                results = list(executor.map(resolve, range(8)))

            assert calls == [1]
            assert len({id(r) for r in results}) == 1

    def test_shared_chain_uses_one_lock(self) -> None:
        root = Container()
        child = Container(root)
        unlocked = Container(child, lock_mode=LockMode.NONE)
        grandchild = Container(unlocked, lock_mode=LockMode.THREAD)

        assert child._lock is root._lock
        assert unlocked._lock is None
        assert grandchild._lock is root._lock
