import threading
from collections import defaultdict
from contextlib import contextmanager


class KeyedLocks:
    """Process-wide registry handing out one re-entrant lock per key."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[tuple[str, int], threading.RLock] = defaultdict(threading.RLock)

    def get(self, kind: str, key: int) -> threading.RLock:
        with self._guard:
            return self._locks[(kind, key)]

    def forget(self, kind: str, key: int) -> None:
        # student entries stay: at most one per user row
        with self._guard:
            self._locks.pop((kind, key), None)

    def __contains__(self, item: tuple[str, int]) -> bool:
        with self._guard:
            return item in self._locks


registry = KeyedLocks()


@contextmanager
def course_lock(course_id: int):
    with registry.get("course", course_id):
        yield


@contextmanager
def student_course_locks(student_id: int, course_id: int):
    # always student first, then course
    with registry.get("student", student_id):
        with registry.get("course", course_id):
            yield
