from os import environ
from typing import Mapping

from flakeid.exceptions import ConfigurationError
from flakeid.utils.snowflake import MAX_DATACENTER_ID, MAX_MACHINE_ID


def read_node_id(env: Mapping[str, str], name: str, max_value: int, default: int = 1) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default

    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"\"{name}\" must be an integer, got {raw!r}") from None

    if not 0 <= value <= max_value:
        raise ConfigurationError(f"\"{name}\" must be between 0 and {max_value}!")

    return value


class AppConfig:
    DATACENTER_ID: int = read_node_id(environ, "FLAKEID_DATACENTER_ID", MAX_DATACENTER_ID)
    MACHINE_ID: int = read_node_id(environ, "FLAKEID_MACHINE_ID", MAX_MACHINE_ID)
