"""Tests for KeyedLock per-key mutual exclusion."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

from shelfctl.infrastructure.locks import KeyedLock


class TestKeyedLock:
    def test_releases_slot_after_use(self) -> None:
        locks = KeyedLock()
        with locks.hold("a"):
            assert len(locks) == 1
        assert len(locks) == 0

    def test_releases_slot_on_exception(self) -> None:
        locks = KeyedLock()
        try:
            with locks.hold("a"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert len(locks) == 0

    def test_same_key_serializes(self) -> None:
        locks = KeyedLock()
        inside = 0
        peak = 0
        counter_guard = threading.Lock()

        def work() -> None:
            nonlocal inside, peak
            with locks.hold("isbn"):
                with counter_guard:
                    inside += 1
                    peak = max(peak, inside)
                time.sleep(0.005)
                with counter_guard:
                    inside -= 1

        with ThreadPoolExecutor(max_workers=8) as pool:
            for _ in range(16):
                pool.submit(work)

        assert peak == 1
        assert len(locks) == 0

    def test_different_keys_do_not_block(self) -> None:
        locks = KeyedLock()
        entered = threading.Event()

        def other() -> None:
            with locks.hold("b"):
                entered.set()

        with locks.hold("a"):
            t = threading.Thread(target=other)
            t.start()
            assert entered.wait(timeout=2)
            t.join()
