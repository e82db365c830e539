import threading

import pytest

from shiptrack.exceptions import ResourceBusy
from shiptrack.utils.locks import KeyedLock


def test_same_thread_can_reenter():
    locks = KeyedLock('test')
    with locks.hold('a', 'b'):
        with locks.hold('b', timeout=0.1):
            pass


def test_busy_key_times_out():
    locks = KeyedLock('test')
    held = threading.Event()
    release = threading.Event()

    def holder():
        with locks.hold(('booking', 1)):
            held.set()
            release.wait(5)

    worker = threading.Thread(target=holder)
    worker.start()
    try:
        assert held.wait(5)
        with pytest.raises(ResourceBusy) as exc:
            with locks.hold(('booking', 2), ('booking', 1), timeout=0.05):
                pass
        assert exc.value.code == 409
        # The key that was free is not left locked behind
        with locks.hold(('booking', 2), timeout=0.05):
            pass
    finally:
        release.set()
        worker.join()


def test_overlapping_sets_do_not_deadlock():
    locks = KeyedLock('test')
    errors = []

    def work(keys):
        try:
            for _ in range(200):
                with locks.hold(*keys, timeout=5):
                    pass
        except ResourceBusy as e:
            errors.append(e)

    threads = [threading.Thread(target=work, args=(keys,))
               for keys in (('a', 'b', 'c'), ('c', 'b', 'a'), ('b', 'a'))]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
