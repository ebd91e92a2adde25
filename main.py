#!/usr/bin/env python3
"""KNoT thing command CLI.

Runs one thing command against the things service and the AMQP bus, the
same way the service runs it for a client message. Useful for operating on
a single thing by hand.

Environment Variables Required:
    - THINGS_URL: Base URL of the things service
    - AMQP_URL: AMQP broker URL

Example Usage:
    $ python main.py --token T --thing-id 19cf40c23012ce1c unregister
    $ python main.py --token T --thing-id 19cf40c23012ce1c request-data 0 1
    $ python main.py --token T --thing-id 19cf40c23012ce1c update-data 0=true 2=on
    $ python main.py --token T --thing-id 19cf40c23012ce1c update-schema schema.json
"""
import argparse
import asyncio
import json
import logging
import sys

from pydantic import TypeAdapter

from src.knot.api.exceptions import KnotError
from src.knot.config import AppConfig, configure_logging
from src.knot.thing.adapters.schemas import SchemaDTO
from src.knot.thing.dependencies import ThingUseCases, create_use_cases
from src.knot.thing.domain.entities import Data, Schema, WorkflowResult

logger = logging.getLogger("knot.cli")


def load_schema_file(path: str) -> list[Schema]:
    """Read a schema list from a JSON file (camelCase KNoT fields).

    Accepts either a bare list or an object with a "schema" key.
    """
    with open(path) as f:
        body = json.load(f)
    if isinstance(body, dict):
        body = body.get("schema", [])
    entries = TypeAdapter(list[SchemaDTO]).validate_python(body)
    return [entry.to_entity() for entry in entries]


def parse_data_item(item: str) -> Data:
    """Parse SENSOR=VALUE, reading VALUE as JSON (true, 21, 1.5, "on")."""
    sensor, sep, raw = item.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected SENSOR=VALUE, got {item!r}")
    try:
        sensor_id = int(sensor)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid sensor id {sensor!r}")
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        value = raw
    if value is None or isinstance(value, (list, dict)):
        raise argparse.ArgumentTypeError(f"unsupported value {raw!r}")
    return Data(sensor_id=sensor_id, value=value)


async def run_command(use_cases: ThingUseCases, args: argparse.Namespace) -> WorkflowResult:
    """Dispatch the parsed command to its use case."""
    if args.command == "update-schema":
        return await use_cases.update_schema.execute(args.token, args.thing_id, args.schema)
    if args.command == "request-data":
        return await use_cases.request_data.execute(args.token, args.thing_id, args.sensor_ids)
    if args.command == "update-data":
        return await use_cases.update_data.execute(args.token, args.thing_id, args.data)
    return await use_cases.unregister.execute(args.token, args.thing_id)


async def run(args: argparse.Namespace, config: AppConfig) -> int:
    """Open the adapters, run one command and print its result.

    Returns:
        Process exit code
    """
    try:
        async with create_use_cases(config) as use_cases:
            result = await run_command(use_cases, args)
    except KnotError as e:
        logger.error(f"{args.command} failed: {e}")
        print(json.dumps({"error": e.to_dict()}, indent=2))
        return 1

    for step in result.degraded:
        logger.warning(f"{args.command}: {step.name} did not complete: {step.error}")
    print(json.dumps(result.to_dict(), indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run a KNoT thing command",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --token T --thing-id ID unregister
  python main.py --token T --thing-id ID request-data 0 1
  python main.py --token T --thing-id ID update-data 0=true
  python main.py --token T --thing-id ID update-schema schema.json
        """
    )

    # Thing selection
    thing_group = parser.add_argument_group("Thing")
    thing_group.add_argument(
        "--token",
        required=True,
        help="Authorization token of the thing"
    )
    thing_group.add_argument(
        "--thing-id",
        required=True,
        help="Thing identifier"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    schema_cmd = commands.add_parser("update-schema", help="Validate and store a new schema")
    schema_cmd.add_argument("schema_file", metavar="FILE", help="JSON schema list")

    request_cmd = commands.add_parser("request-data", help="Ask the thing for sensor values")
    request_cmd.add_argument("sensor_ids", type=int, nargs="*", metavar="SENSOR")

    update_cmd = commands.add_parser("update-data", help="Write values to the thing")
    update_cmd.add_argument("data", type=parse_data_item, nargs="+", metavar="SENSOR=VALUE")

    commands.add_parser("unregister", help="Remove the thing from the registry")

    return parser


def main():
    args = build_parser().parse_args()

    try:
        config = AppConfig.from_env()
    except KnotError as e:
        print(f"[Main] Configuration error: {e}")
        sys.exit(1)

    configure_logging(config.log_level)

    if args.command == "update-schema":
        try:
            args.schema = load_schema_file(args.schema_file)
        except (OSError, ValueError) as e:
            print(f"[Main] Cannot read schema file: {e}")
            sys.exit(1)

    sys.exit(asyncio.run(run(args, config)))


if __name__ == "__main__":
    main()
