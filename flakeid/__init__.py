from flakeid.exceptions import Error, ConfigurationError, ClockMovedBackwardsError, TimestampOverflowError, \
    FatalOverflowError
from flakeid.generator import SequenceGenerator, time_ms
from flakeid.utils.snowflake import EPOCH_OFFSET, SnowflakeParts, make, melt, to_datetime, from_datetime

__all__ = (
    "Error", "ConfigurationError", "ClockMovedBackwardsError", "TimestampOverflowError", "FatalOverflowError",
    "SequenceGenerator", "time_ms", "EPOCH_OFFSET", "SnowflakeParts", "make", "melt", "to_datetime", "from_datetime",
)
