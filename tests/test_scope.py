import itertools
import threading
import time
import unittest
from concurrent.futures import ThreadPoolExecutor

from chainbind import Injector, Scope, create_injector, injectable


class TestSingletonScope(unittest.TestCase):
    root: Injector

    def setUp(self):
        self.root = create_injector()

    def test_singleton_value_is_cached(self):
        n = itertools.count()

        def count():
            return next(n)

        count_injector = self.root.provide_factory("count", count)

        @injectable("count")
        class Consumer:
            def __init__(self, count):
                self.count = count

        first = count_injector.inject_class(Consumer)
        second = count_injector.inject_class(Consumer)
        assert first.count == second.count

    def test_singleton_class_resolves_to_same_instance(self):
        class Service: ...

        injector = self.root.provide_class("service", Service, Scope.SINGLETON)
        assert injector.resolve("service") is injector.resolve("service")

    def test_singleton_is_shared_by_descendants(self):
        class Service: ...

        shared = self.root.provide_class("service", Service)
        left = shared.provide_value("left", 1)
        right = shared.provide_value("right", 2)

        assert left.resolve("service") is right.resolve("service")
        assert shared.resolve("service") is left.resolve("service")

    def test_cache_is_per_binding(self):
        class Service: ...

        first = self.root.provide_class("service", Service)
        second = self.root.provide_class("service", Service)

        assert first.resolve("service") is not second.resolve("service")

    def test_singleton_none_result_is_cached(self):
        calls = []

        def nothing():
            calls.append(1)

        injector = self.root.provide_factory("nothing", nothing)
        assert injector.resolve("nothing") is None
        assert injector.resolve("nothing") is None
        assert len(calls) == 1

    def test_singleton_is_created_once_across_threads(self):
        calls = []

        def slow():
            calls.append(threading.get_ident())
            time.sleep(0.01)
            return object()

        injector = self.root.provide_factory("slow", slow).provide_value("other", 1)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: injector.resolve("slow"), range(16)))

        assert len(calls) == 1
        assert all(r is results[0] for r in results)


class TestTransientScope(unittest.TestCase):
    root: Injector

    def setUp(self):
        self.root = create_injector()

    def test_transient_value_is_not_cached(self):
        n = itertools.count()

        def count():
            return next(n)

        count_injector = self.root.provide_factory("count", count, Scope.TRANSIENT)

        @injectable("count")
        class Consumer:
            def __init__(self, count):
                self.count = count

        first = count_injector.inject_class(Consumer)
        second = count_injector.inject_class(Consumer)
        assert first.count == 0
        assert second.count == 1

    def test_transient_class_resolves_to_new_instances(self):
        class Service: ...

        injector = self.root.provide_class("service", Service, Scope.TRANSIENT)
        assert injector.resolve("service") is not injector.resolve("service")
