from threading import Lock

from loguru import logger

from flakeid.app_config import AppConfig
from flakeid.generator import SequenceGenerator

_generator: SequenceGenerator | None = None
_generator_lock = Lock()


def get_generator() -> SequenceGenerator:
    """
    Returns process-wide generator, creating it from AppConfig on first call.
    Meant for application entry points, library code should receive a SequenceGenerator explicitly.
    """

    global _generator

    if _generator is None:
        with _generator_lock:
            if _generator is None:
                _generator = SequenceGenerator(AppConfig.DATACENTER_ID, AppConfig.MACHINE_ID)
                logger.info(f"Initialized default generator: {_generator!r}")

    return _generator


def next_id() -> int:
    return get_generator().next_id()


def next_id_str() -> str:
    return get_generator().next_id_str()


def reset() -> None:
    global _generator

    with _generator_lock:
        _generator = None
