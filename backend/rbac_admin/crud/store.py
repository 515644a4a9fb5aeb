import threading
from collections.abc import Callable, Iterable, Iterator
from typing import Generic, Protocol, TypeVar


class Identified(Protocol):
    @property
    def id(self) -> int: ...


RecordT = TypeVar("RecordT", bound=Identified)


class ResourceStore(Generic[RecordT]):
    """Ordered in-memory collection of records keyed by integer id.

    Ids come from a monotonic counter seeded past the largest initial id, so
    an id is never handed out twice even after deletions. Every mutation is
    serialized behind a lock, which keeps the store safe to share with a
    threadpool.
    """

    def __init__(self, initial: Iterable[RecordT] = ()) -> None:
        self._records: dict[int, RecordT] = {}
        for record in initial:
            if record.id in self._records:
                raise ValueError(f"Duplicate id {record.id} in initial records")
            self._records[record.id] = record
        self._next_id = max(self._records, default=0) + 1
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def __iter__(self) -> Iterator[RecordT]:
        return iter(self.list_all())

    def get_by_id(self, record_id: int) -> RecordT | None:
        return self._records.get(record_id)

    def list_all(self) -> list[RecordT]:
        with self._lock:
            return list(self._records.values())

    def add(self, build: Callable[[int], RecordT]) -> RecordT:
        """Append the record produced by ``build`` for a freshly assigned id."""
        with self._lock:
            record_id = self._next_id
            record = build(record_id)
            if record.id != record_id:
                raise ValueError(f"Record built with id {record.id}, expected {record_id}")
            self._records[record_id] = record
            self._next_id += 1
            return record

    def replace(self, record: RecordT) -> RecordT | None:
        """Swap in ``record`` at its existing position; returns the previous version."""
        with self._lock:
            previous = self._records.get(record.id)
            if previous is None:
                return None
            self._records[record.id] = record
            return previous

    def remove(self, record_id: int) -> RecordT | None:
        with self._lock:
            return self._records.pop(record_id, None)
