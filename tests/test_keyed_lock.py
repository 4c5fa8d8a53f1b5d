import threading
import time

from workforce_attendance.core.keyed_lock import KeyedLock


def test_same_key_is_mutually_exclusive():
    locks = KeyedLock()
    active = []
    overlaps = []
    guard = threading.Lock()

    def worker():
        with locks.hold(("user", 1)):
            with guard:
                active.append(1)
                if len(active) > 1:
                    overlaps.append(len(active))
            time.sleep(0.005)
            with guard:
                active.pop()

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert overlaps == []


def test_different_keys_do_not_block_each_other():
    locks = KeyedLock()
    entered = threading.Event()
    release = threading.Event()

    def holder():
        with locks.hold("a"):
            entered.set()
            release.wait(timeout=5)

    thread = threading.Thread(target=holder)
    thread.start()
    assert entered.wait(timeout=5)

    acquired = threading.Event()

    def other():
        with locks.hold("b"):
            acquired.set()

    other_thread = threading.Thread(target=other)
    other_thread.start()

    assert acquired.wait(timeout=5)

    release.set()
    thread.join()
    other_thread.join()


def test_idle_keys_are_released():
    locks = KeyedLock()

    with locks.hold("a"):
        with locks.hold("b"):
            assert len(locks) == 2

    assert len(locks) == 0


def test_lock_is_released_on_error():
    locks = KeyedLock()

    try:
        with locks.hold("a"):
            raise RuntimeError("boom")
    except RuntimeError:
        pass

    with locks.hold("a"):
        assert len(locks) == 1
    assert len(locks) == 0
