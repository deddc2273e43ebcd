import threading
from enum import Enum

from core.errors import InvalidArgument
from ids.random_ids import generate_numeric_id, generate_random_uuid, generate_short_id
from ids.ulid import generate_sortable_id
from ids.uuid7 import generate_time_ordered_uuid
from internal.logging import get_logger


class IdKind(Enum):
    UUID7 = "uuid7"
    ULID = "ulid"
    UUID4 = "uuid4"
    SHORT = "short"
    NUMERIC = "numeric"


_GENERATORS = {
    IdKind.UUID7: generate_time_ordered_uuid,
    IdKind.ULID: generate_sortable_id,
    IdKind.UUID4: generate_random_uuid,
    IdKind.SHORT: generate_short_id,
    IdKind.NUMERIC: generate_numeric_id,
}

# Kinds that embed a caller-supplied timestamp
_TIMED = {IdKind.UUID7, IdKind.ULID}


class IdIssuer:
    """Issues identifiers by kind, counting each issuance.

    `sink(kind, data)` is called for every issued identifier and must not block.
    """

    def __init__(self, max_batch=100, sink=None):
        self.max_batch = max_batch
        self._sink = sink
        self._lock = threading.Lock()
        self._issued = {kind: 0 for kind in IdKind}
        self._log = get_logger(component="issuer")

    @staticmethod
    def parse_kind(kind):
        if isinstance(kind, IdKind):
            return kind
        try:
            return IdKind(str(kind).lower())
        except ValueError:
            raise InvalidArgument(f"Unknown identifier kind {kind!r}", field="kind", value=str(kind)) from None

    def issue(self, kind, timestamp_ms=None):
        return self.issue_batch(kind, 1, timestamp_ms)[0]

    def issue_batch(self, kind, count, timestamp_ms=None):
        kind = self.parse_kind(kind)
        if isinstance(count, bool) or not isinstance(count, int) or not 1 <= count <= self.max_batch:
            raise InvalidArgument(f"Count must be between 1 and {self.max_batch}", field="count", value=str(count))
        if timestamp_ms is not None and kind not in _TIMED:
            raise InvalidArgument(f"{kind.value} identifiers do not take a timestamp", field="timestamp_ms")

        generate = _GENERATORS[kind]
        if kind in _TIMED:
            values = [generate(timestamp_ms) for _ in range(count)]
        else:
            values = [generate() for _ in range(count)]

        with self._lock:
            self._issued[kind] += count

        if self._sink:
            for value in values:
                self._sink(kind.value, value)
        self._log.debug("issued", kind=kind.value, count=count)
        return values

    def get_stats(self):
        with self._lock:
            issued = {kind.value: n for kind, n in self._issued.items()}
        return {"issued": issued, "total_issued": sum(issued.values())}
