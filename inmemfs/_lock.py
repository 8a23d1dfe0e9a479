import threading
from collections.abc import Iterator
from contextlib import contextmanager


class ReadWriteLock:
    """A readers–writer lock with writer preference.

    Multiple readers can hold the lock concurrently, but a writer requires
    exclusive access.  Once a writer is waiting, newly arriving readers queue
    behind it, so a steady stream of readers cannot starve mutators.  The
    lock is **not reentrant**: acquiring either side twice from one thread
    while a writer waits deadlocks.  There are no timeouts.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._read_count: int = 0
        self._write_held: bool = False
        self._writers_waiting: int = 0

    def acquire_read(self) -> None:
        with self._condition:
            while self._write_held or self._writers_waiting:
                self._condition.wait()
            self._read_count += 1

    def release_read(self) -> None:
        with self._condition:
            if self._read_count <= 0:
                raise RuntimeError("release_read called without matching acquire_read")
            self._read_count -= 1
            if self._read_count == 0:
                self._condition.notify_all()

    def acquire_write(self) -> None:
        with self._condition:
            self._writers_waiting += 1
            try:
                while self._write_held or self._read_count > 0:
                    self._condition.wait()
            finally:
                self._writers_waiting -= 1
            self._write_held = True

    def release_write(self) -> None:
        with self._condition:
            if not self._write_held:
                raise RuntimeError("release_write called without matching acquire_write")
            self._write_held = False
            self._condition.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

    @property
    def is_write_locked(self) -> bool:
        with self._condition:
            return self._write_held
