import threading
import time

from utils.locks import ReadWriteLock


def wait_until(condition, timeout=5):
    deadline = time.monotonic() + timeout
    while not condition():
        assert time.monotonic() < deadline, "condition not reached"
        time.sleep(0.005)


def start_thread(target):
    thread = threading.Thread(target=target, daemon=True)
    thread.start()
    return thread


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    both_inside = threading.Barrier(2, timeout=5)

    def reader():
        with lock.read():
            both_inside.wait()

    threads = [start_thread(reader) for _ in range(2)]
    for thread in threads:
        thread.join(5)

    assert not both_inside.broken
    assert not any(thread.is_alive() for thread in threads)


def test_writer_waits_for_active_reader():
    lock = ReadWriteLock()
    reader_inside = threading.Event()
    release_reader = threading.Event()
    order = []

    def reader():
        with lock.read():
            reader_inside.set()
            release_reader.wait(5)
            order.append("reader")

    def writer():
        with lock.write():
            order.append("writer")

    t1 = start_thread(reader)
    assert reader_inside.wait(5)
    t2 = start_thread(writer)
    time.sleep(0.05)
    assert order == []

    release_reader.set()
    t1.join(5)
    t2.join(5)
    assert order == ["reader", "writer"]


def test_waiting_writer_blocks_new_readers():
    lock = ReadWriteLock()
    first_inside = threading.Event()
    release_first = threading.Event()
    order = []

    def first_reader():
        with lock.read():
            first_inside.set()
            release_first.wait(5)
            order.append("first reader")

    def writer():
        with lock.write():
            order.append("writer")

    def late_reader():
        with lock.read():
            order.append("late reader")

    threads = [start_thread(first_reader)]
    assert first_inside.wait(5)
    threads.append(start_thread(writer))
    wait_until(lambda: lock._waiting_writers == 1)

    threads.append(start_thread(late_reader))
    time.sleep(0.05)
    assert order == []

    release_first.set()
    for thread in threads:
        thread.join(5)

    assert order == ["first reader", "writer", "late reader"]
