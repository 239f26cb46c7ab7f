import argparse
import sys
from os import environ

from loguru import logger

from flakeid.exceptions import Error, ConfigurationError
from flakeid.generator import SequenceGenerator
from flakeid.utils.snowflake import melt


def _positive_int(value: str) -> int:
    result = int(value)
    if result <= 0:
        raise argparse.ArgumentTypeError(f"{value} is not a positive integer")
    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="flakeid", description="Generate and inspect snowflake ids")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Print new ids, one per line")
    generate.add_argument("-n", "--count", type=_positive_int, default=1, help="How many ids to generate")
    generate.add_argument("--datacenter-id", type=int, default=None,
                          help="Datacenter id (0-31), defaults to FLAKEID_DATACENTER_ID or 1")
    generate.add_argument("--machine-id", type=int, default=None,
                          help="Machine id (0-31), defaults to FLAKEID_MACHINE_ID or 1")

    decode = subparsers.add_parser("decode", help="Print parts of existing ids")
    decode.add_argument("ids", type=int, nargs="+", metavar="ID", help="Snowflake id")

    return parser


def setup_logging() -> None:
    level = environ.get("FLAKEID_LOG_LEVEL", "INFO").strip().upper() or "INFO"

    logger.remove()
    try:
        logger.add(sys.stderr, level=level)
    except ValueError:
        logger.add(sys.stderr, level="INFO")
        raise ConfigurationError(f"\"FLAKEID_LOG_LEVEL\" is not a known log level: {level!r}") from None


def _generate(args: argparse.Namespace) -> None:
    datacenter_id, machine_id = args.datacenter_id, args.machine_id
    if datacenter_id is None or machine_id is None:
        # Environment is only consulted when a node id was not given explicitly
        from flakeid.app_config import AppConfig

        datacenter_id = AppConfig.DATACENTER_ID if datacenter_id is None else datacenter_id
        machine_id = AppConfig.MACHINE_ID if machine_id is None else machine_id

    generator = SequenceGenerator(datacenter_id, machine_id)
    for _ in range(args.count):
        print(generator.next_id())


def _decode(args: argparse.Namespace) -> None:
    for snowflake_id in args.ids:
        try:
            parts = melt(snowflake_id)
        except ValueError as e:
            raise Error(str(e)) from e

        print(
            f"{snowflake_id}: time={parts.datetime.isoformat(timespec='milliseconds')} "
            f"datacenter={parts.datacenter_id} machine={parts.machine_id} sequence={parts.sequence}"
        )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        setup_logging()
        if args.command == "generate":
            _generate(args)
        else:
            _decode(args)
    except Error as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
