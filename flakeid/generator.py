from threading import Lock
from time import time_ns, sleep
from typing import Callable

from loguru import logger

from flakeid.exceptions import ConfigurationError, ClockMovedBackwardsError, TimestampOverflowError
from flakeid.utils.snowflake import MAX_DATACENTER_ID, MAX_MACHINE_ID, MAX_SEQUENCE, elapsed_since_epoch, pack


def time_ms() -> int:
    return time_ns() // 1_000_000


def _check_node_id(name: str, value: int, max_value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} should be an integer, got {value!r}")
    if not 0 <= value <= max_value:
        raise ConfigurationError(f"{name} should be between 0 and {max_value}, got {value}")


class SequenceGenerator:
    """
    Thread-safe snowflake id generator for a single node.

    Id layout (most significant bit first):
        1 bit   - sign, always 0
        41 bits - milliseconds since EPOCH_OFFSET
        5 bits  - datacenter id
        5 bits  - machine id
        12 bits - sequence number, 1-4094, restarts every millisecond

    Sequence value 4095 is never emitted: when it is reached, generator waits for the next millisecond instead.
    """

    def __init__(self, datacenter_id: int, machine_id: int, clock: Callable[[], int] = time_ms):
        _check_node_id("datacenter_id", datacenter_id, MAX_DATACENTER_ID)
        _check_node_id("machine_id", machine_id, MAX_MACHINE_ID)

        self._datacenter_id = datacenter_id
        self._machine_id = machine_id
        self._clock = clock

        self._last_timestamp: int | None = None
        self._sequence = 0
        self._lock = Lock()

        logger.debug(f"Created sequence generator for datacenter {datacenter_id}, machine {machine_id}")

    @property
    def datacenter_id(self) -> int:
        return self._datacenter_id

    @property
    def machine_id(self) -> int:
        return self._machine_id

    @property
    def last_timestamp(self) -> int | None:
        return self._last_timestamp

    @property
    def sequence(self) -> int:
        return self._sequence

    def _wait_next_millis(self, last_timestamp: int) -> int:
        timestamp = self._clock()
        while timestamp <= last_timestamp:
            if timestamp < last_timestamp:
                logger.warning(f"Clock moved backwards while waiting: last is {last_timestamp}, got {timestamp}")
                raise ClockMovedBackwardsError(last_timestamp, timestamp)
            sleep(0)
            timestamp = self._clock()
        return timestamp

    def next_id(self) -> int:
        with self._lock:
            timestamp = self._clock()
            last_timestamp = self._last_timestamp

            if last_timestamp is not None and timestamp < last_timestamp:
                logger.warning(f"Clock moved backwards: last timestamp is {last_timestamp}, got {timestamp}")
                raise ClockMovedBackwardsError(last_timestamp, timestamp)

            if timestamp == last_timestamp:
                sequence = self._sequence + 1
                if sequence == MAX_SEQUENCE:
                    logger.trace(f"Sequence exhausted for {timestamp}, waiting for next millisecond")
                    timestamp = self._wait_next_millis(last_timestamp)
                    sequence = 1
            else:
                sequence = 1

            try:
                elapsed = elapsed_since_epoch(timestamp)
            except TimestampOverflowError as e:
                logger.opt(exception=e).error(f"Timestamp {timestamp} is outside of snowflake id range")
                raise

            self._last_timestamp = timestamp
            self._sequence = sequence

            return pack(elapsed, self._datacenter_id, self._machine_id, sequence)

    def next_id_str(self) -> str:
        return str(self.next_id())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(datacenter_id={self._datacenter_id}, machine_id={self._machine_id})"
