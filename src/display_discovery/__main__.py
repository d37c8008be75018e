#!/usr/bin/env python3
"""
Display LWT Discovery CLI.

Runs the discovery builder outside a flow editor: one message from the
command line, or a stream of JSON lines from stdin.
"""

import argparse
from datetime import datetime
import json
import logging
from pathlib import Path
import sys
from typing import Optional

from .builder import build_discovery_messages
from .config import Config
from .messages import InboundMessage
from .validation_utils import validate_messages

logger = logging.getLogger(__name__)


def _get_version() -> str:
    try:
        from . import __version__

        return __version__
    except ImportError:
        return "0.0.0-dev"


def _setup_logging(debug: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all CLI commands."""
    parser = argparse.ArgumentParser(
        prog="display-discovery",
        description="Home Assistant MQTT discovery for e-paper display LWT messages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  display-discovery build --topic displays/porch-display/lwt \\
      --payload '{"battery_percentage": 87, "firmware_version": 123}'
  display-discovery process < lwt_messages.jsonl
  display-discovery validate --topic displays/porch-display/lwt --payload '{}'
  display-discovery status
        """,
    )

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {_get_version()}"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="path to configuration file (built-in defaults when omitted)",
    )
    parser.add_argument("--debug", action="store_true", help="enable debug output")

    subparsers = parser.add_subparsers(
        dest="command", help="available commands", required=False
    )

    build_parser = subparsers.add_parser(
        "build", help="build discovery messages for one LWT message"
    )
    _add_message_arguments(build_parser)
    build_parser.add_argument(
        "--timestamp",
        type=str,
        help="ISO-8601 time to use for last_seen instead of now",
    )
    build_parser.add_argument(
        "--pretty", action="store_true", help="indent the JSON output"
    )

    process_parser = subparsers.add_parser(
        "process", help="read JSON lines {topic, payload} and emit outbound messages"
    )
    process_parser.add_argument(
        "--input", type=str, help="input file (stdin when omitted)"
    )

    validate_parser = subparsers.add_parser(
        "validate", help="build discovery messages and check their shape"
    )
    _add_message_arguments(validate_parser)

    subparsers.add_parser("status", help="show active configuration")

    return parser


def _add_message_arguments(sub: argparse.ArgumentParser) -> None:
    sub.add_argument("--topic", required=True, help="LWT topic, e.g. displays/x/lwt")
    source = sub.add_mutually_exclusive_group(required=True)
    source.add_argument("--payload", type=str, help="LWT payload as JSON text")
    source.add_argument("--payload-file", type=str, help="file holding the payload")


def _read_payload(args) -> str:
    if getattr(args, "payload_file", None):
        return Path(args.payload_file).read_text(encoding="utf-8")
    return args.payload


def _fixed_clock(timestamp: Optional[str]):
    if not timestamp:
        return None
    moment = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    return lambda: moment


def cmd_build(config: Config, args) -> int:
    """Handle the build command."""
    try:
        clock = _fixed_clock(args.timestamp)
    except ValueError as e:
        print(f"❌ Invalid --timestamp: {e}", file=sys.stderr)
        return 1

    result = build_discovery_messages(args.topic, _read_payload(args), config, clock)
    if not result.ok:
        for diag in result.diagnostics:
            print(f"❌ {diag.kind}: {diag.message}", file=sys.stderr)
        return 1

    print(
        json.dumps(
            [m.as_dict() for m in result.messages],
            indent=2 if args.pretty else None,
            ensure_ascii=False,
        )
    )
    return 0


def cmd_process(config: Config, args) -> int:
    """Handle the process command: JSON lines in, JSON lines out."""
    stream = open(args.input, encoding="utf-8") if args.input else sys.stdin
    produced = 0
    skipped = 0
    try:
        for line_no, line in enumerate(stream, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                data = json.loads(line)
            except json.JSONDecodeError as e:
                logger.error("line %d: invalid JSON: %s", line_no, e)
                skipped += 1
                continue
            if not isinstance(data, dict):
                logger.warning("line %d: expected an object with topic/payload", line_no)
                skipped += 1
                continue

            inbound = InboundMessage.from_dict(data)
            result = build_discovery_messages(inbound.topic, inbound.payload, config)
            if not result.ok:
                skipped += 1
                continue
            for msg in result.messages:
                print(json.dumps(msg.as_dict(), ensure_ascii=False))
                produced += 1
    finally:
        if stream is not sys.stdin:
            stream.close()

    logger.info("processed input: %d messages emitted, %d inputs skipped", produced, skipped)
    return 0


def cmd_validate(config: Config, args) -> int:
    """Handle the validate command."""
    result = build_discovery_messages(args.topic, _read_payload(args), config)
    if not result.ok:
        for diag in result.diagnostics:
            print(f"❌ {diag.kind}: {diag.message}")
        return 1

    errors = validate_messages(result.messages, config.discovery_prefix)
    if errors:
        print("❌ Discovery validation errors:")
        for error in errors:
            print(f"  - {error}")
        return 1

    print(f"✅ {len(result.messages)} messages built, discovery payloads valid")
    return 0


def cmd_status(config: Config, args) -> int:
    """Show configuration status."""
    print("📟 Display LWT Discovery")
    print("=" * 50)
    print(f"  Version: {_get_version()}")
    print(f"  Config: {config.config_path or 'inline'}")
    print(f"  LWT topic: {config.lwt_topic_prefix}/<device>/{config.lwt_topic_suffix}")
    print(f"  Discovery prefix: {config.discovery_prefix}")
    print(
        f"  Object ids: {'per sensor' if config.per_sensor_object_id else 'shared per device'}"
    )
    print(
        f"  Debug echo: {'✅ ' + config.debug_topic('<device>') if config.debug_enabled else '❌ disabled'}"
    )

    errors = config.validate()
    if errors:
        print("\n❌ Configuration errors:")
        for error in errors:
            print(f"  - {error}")
        return 1
    print("\n✅ Configuration validation passed!")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.debug)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        config = Config.from_file(args.config) if args.config else Config.from_defaults()

        if args.command == "build":
            return cmd_build(config, args)
        elif args.command == "process":
            return cmd_process(config, args)
        elif args.command == "validate":
            return cmd_validate(config, args)
        elif args.command == "status":
            return cmd_status(config, args)
        else:
            print(f"❌ Unknown command: {args.command}")
            return 1

    except Exception as e:
        print(f"❌ Error: {e}")
        if args.debug:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
