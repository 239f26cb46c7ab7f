from dataclasses import dataclass
from datetime import datetime, timezone

from flakeid.exceptions import TimestampOverflowError

EPOCH_OFFSET = 1483200000000  # 31.12.2016, 16:00:00 UTC

SIGN_BITS = 1
TIMESTAMP_BITS = 41
DATACENTER_BITS = 5
MACHINE_ID_BITS = 5
SEQUENCE_BITS = 12

MACHINE_ID_SHIFT = SEQUENCE_BITS
DATACENTER_SHIFT = SEQUENCE_BITS + MACHINE_ID_BITS
TIMESTAMP_SHIFT = SEQUENCE_BITS + MACHINE_ID_BITS + DATACENTER_BITS
SIGN_SHIFT = TIMESTAMP_SHIFT + TIMESTAMP_BITS

MAX_TIMESTAMP = -1 ^ (-1 << TIMESTAMP_BITS)
MAX_DATACENTER_ID = -1 ^ (-1 << DATACENTER_BITS)
MAX_MACHINE_ID = -1 ^ (-1 << MACHINE_ID_BITS)
MAX_SEQUENCE = -1 ^ (-1 << SEQUENCE_BITS)


@dataclass(frozen=True, slots=True)
class SnowflakeParts:
    timestamp: int
    datacenter_id: int
    machine_id: int
    sequence: int

    @property
    def elapsed(self) -> int:
        return self.timestamp - EPOCH_OFFSET

    @property
    def datetime(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp / 1000, timezone.utc)


def elapsed_since_epoch(timestamp_ms: int) -> int:
    elapsed = timestamp_ms - EPOCH_OFFSET
    if elapsed < 0 or elapsed > MAX_TIMESTAMP:
        raise TimestampOverflowError(timestamp_ms)
    return elapsed


def pack(elapsed: int, datacenter_id: int, machine_id: int, sequence: int) -> int:
    """
    Packs already validated fields into an id. Sign bit is always 0.
    """

    return (elapsed << TIMESTAMP_SHIFT) \
        | (datacenter_id << DATACENTER_SHIFT) \
        | (machine_id << MACHINE_ID_SHIFT) \
        | sequence


def make(timestamp_ms: int, datacenter_id: int, machine_id: int, sequence: int) -> int:
    """
    Builds snowflake id from its parts.

    :param timestamp_ms: time since UNIX epoch in milliseconds
    :param datacenter_id: datacenter id, 0-31
    :param machine_id: machine id, 0-31
    :param sequence: per-millisecond sequence number, 0-4095
    """

    if not 0 <= datacenter_id <= MAX_DATACENTER_ID:
        raise ValueError(f"datacenter_id should be between 0 and {MAX_DATACENTER_ID}, got {datacenter_id}")
    if not 0 <= machine_id <= MAX_MACHINE_ID:
        raise ValueError(f"machine_id should be between 0 and {MAX_MACHINE_ID}, got {machine_id}")
    if not 0 <= sequence <= MAX_SEQUENCE:
        raise ValueError(f"sequence should be between 0 and {MAX_SEQUENCE}, got {sequence}")

    return pack(elapsed_since_epoch(timestamp_ms), datacenter_id, machine_id, sequence)


def melt(snowflake_id: int) -> SnowflakeParts:
    """Splits snowflake id back into its parts."""

    if snowflake_id < 0 or snowflake_id >> SIGN_SHIFT:
        raise ValueError(f"{snowflake_id} is not a valid snowflake id")

    return SnowflakeParts(
        timestamp=(snowflake_id >> TIMESTAMP_SHIFT) + EPOCH_OFFSET,
        datacenter_id=(snowflake_id >> DATACENTER_SHIFT) & MAX_DATACENTER_ID,
        machine_id=(snowflake_id >> MACHINE_ID_SHIFT) & MAX_MACHINE_ID,
        sequence=snowflake_id & MAX_SEQUENCE,
    )


def to_datetime(snowflake_id: int) -> datetime:
    return melt(snowflake_id).datetime


def from_datetime(dt: datetime, upper: bool = False) -> int:
    # Naive datetimes are treated as local time, same as datetime.timestamp() does
    timestamp_ms = int(dt.timestamp() * 1000)
    if upper:
        return make(timestamp_ms, MAX_DATACENTER_ID, MAX_MACHINE_ID, MAX_SEQUENCE)
    return make(timestamp_ms, 0, 0, 0)
