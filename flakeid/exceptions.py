class Error(Exception):
    pass


class ConfigurationError(Error, ValueError):
    pass


class ClockMovedBackwardsError(Error):
    def __init__(self, last_timestamp: int, timestamp: int):
        super().__init__(
            f"Clock moved backwards by {last_timestamp - timestamp}ms "
            f"(last: {last_timestamp}, now: {timestamp}), refusing to generate id"
        )
        self.last_timestamp = last_timestamp
        self.timestamp = timestamp

    @property
    def offset_ms(self) -> int:
        return self.last_timestamp - self.timestamp


class TimestampOverflowError(Error, OverflowError):
    def __init__(self, timestamp: int):
        super().__init__(f"Timestamp {timestamp} does not fit into snowflake timestamp field")
        self.timestamp = timestamp


FatalOverflowError = TimestampOverflowError
