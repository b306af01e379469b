#!/usr/bin/env python3
"""
Command-line mirror runner for reflector.

Evaluates each configured source against its local store and fetches the
captures missing from the current loop window. Meant to be run by hand or
from cron.

Usage:
    reflect [--config FILE] [--source KEY ...] [fill [--min-interval SECONDS]]
    reflect status
    reflect captures [--loops N]
    reflect --source goesabi get ABI_TrueColor_20231014_1500z.png --output latest.png

Exit codes:
    0  every source completed (partial fills included)
    1  a source hit a hard error (bad store, unreachable remote, nothing expected)
    2  configuration error
"""

import argparse
import logging
import os
import sys
from typing import Optional

import pydantic

from naming.errors import CodecError, NoCodecName, UnknownCodec
from reconciliation.mirror import Mirror
from reconciliation.scheduler import RunScheduler
from remote.errors import RemoteError
from shared.logging_config import configure_logging
from store.capture import CaptureList, NoArtifactsExpected
from store.errors import StoreError
from timing.errors import ScheduleError
from timing.util import display_time, utc_now
from validation.config import (
    ConfigError,
    ReflectorConfig,
    SourceConfig,
    SourceNotFound,
    default_config,
    load_config,
)
from validation.settings import LOG_FORMATS, LOG_LEVELS, get_settings

logger = logging.getLogger('reflector.cli')

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2

# Failures that stop one source but not the run
SOURCE_ERRORS = (
    RemoteError,
    StoreError,
    NoArtifactsExpected,
    ScheduleError,
    CodecError,
    UnknownCodec,
    NoCodecName,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='reflect', description='Mirror time-stamped captures from remote sources')
    parser.add_argument('--config', '-c', help='YAML file listing sources (or set REFLECTOR_CONFIG)')
    parser.add_argument('--source', '-s', action='append', default=[],
                        help='Source name or abbrev to process (repeatable, default: all)')
    parser.add_argument('--log-level', choices=LOG_LEVELS, help='Log level (or set REFLECTOR_LOG_LEVEL)')
    parser.add_argument('--log-format', choices=LOG_FORMATS, help='Log format (or set REFLECTOR_LOG_FORMAT)')
    parser.add_argument('--data-dir', '-d', help='Directory for run state (or set REFLECTOR_DATA_DIR)')
    commands = parser.add_subparsers(dest='command')
    parser.set_defaults(command='fill', min_interval=0, loops=1)

    commands.add_parser('status', help='Show how completely each source is mirrored')

    fill = commands.add_parser('fill', help='Fetch missing captures in the loop window (default)')
    fill.add_argument('--min-interval', type=int, default=0,
                      help='Skip sources run less than this many seconds ago')

    captures = commands.add_parser('captures', help='List captures present locally')
    captures.add_argument('--loops', type=int, default=1, help='Number of loop periods to list')

    get = commands.add_parser('get', help='Fetch a single resource from one source')
    get.add_argument('resource', help='Remote identifier')
    get.add_argument('--output', '-o', help='Output file (default: resource basename)')

    return parser


def resolve_config(path: Optional[str]) -> ReflectorConfig:
    if not path:
        logger.debug("No config file given, using built-in sources")
        return default_config()
    return load_config(path)


def print_captures(captures: CaptureList) -> None:
    print(f"mirror has {captures}")
    latest = captures.latest()
    if latest is not None:
        print(f"latest stamped {display_time(latest.time)} file {latest.path}")


def run_status(mirror: Mirror) -> int:
    status = mirror.evaluate()
    print(f"{mirror.name}: {mirror.store}")
    print(f"  {status}")
    return EXIT_OK


def run_fill(mirror: Mirror, scheduler: Optional[RunScheduler], min_interval: int) -> int:
    if scheduler is not None and not scheduler.is_due(mirror.name, min_interval):
        print(f"mirror {mirror.name} ran less than {min_interval}s ago, skipping")
        return EXIT_OK

    now = utc_now()
    status = mirror.evaluate(now)
    print(f"{mirror.name}: {status}")

    outcome = None
    if status.is_full:
        print(f"mirror {mirror.name} is already full for the default loop period")
        captures = mirror.loop_captures(now)
    else:
        print(f"fetching mirror {mirror.name}")
        outcome = mirror.fill_loop(now)
        captures = outcome.captures
        if outcome.error is not None:
            print(f"filling loop captures incomplete: {len(outcome.failures)} failed, first: {outcome.error}")

    print_captures(captures)
    if scheduler is not None:
        scheduler.record_run(mirror.name, status, outcome=outcome, captures=captures)
    return EXIT_OK


def run_captures(mirror: Mirror, loops: int) -> int:
    window = mirror.loops_range(loops)
    captures = mirror.captures_in_range(window)
    print(f"{len(captures)} captures in {loops} periods:")
    for capture in captures.present:
        print(capture)
    return EXIT_OK


def run_get(mirror: Mirror, resource: str, output: Optional[str]) -> int:
    output = output or os.path.basename(resource.rstrip('/'))
    try:
        gotten = mirror.client.download(resource, output)
    except OSError as e:
        print(f"cannot write {output}: {e}", file=sys.stderr)
        return EXIT_FAILED
    print(f"{gotten.source} -> {output} ({gotten.size} bytes)")
    return EXIT_OK


def run_source(source: SourceConfig, args: argparse.Namespace, scheduler: Optional[RunScheduler]) -> int:
    """Run the selected command for one source; per-source failures become exit codes."""
    source.log_config()
    try:
        with Mirror.from_config(source) as mirror:
            logger.info(f"got {mirror}: {mirror.describe()}")
            if args.command == 'status':
                return run_status(mirror)
            if args.command == 'captures':
                return run_captures(mirror, args.loops)
            if args.command == 'get':
                return run_get(mirror, args.resource, args.output)
            return run_fill(mirror, scheduler, args.min_interval)
    except SOURCE_ERRORS as e:
        logger.error(f"{source.name}: {type(e).__name__}: {e}")
        print(f"mirror {source.name} failed: {e}", file=sys.stderr)
        return EXIT_FAILED


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except pydantic.ValidationError as exc:
        print(f"\nConfiguration error:\n{exc}\n", file=sys.stderr)
        return EXIT_CONFIG

    configure_logging(args.log_level or settings.log_level, args.log_format or settings.log_format)

    try:
        config = resolve_config(args.config or settings.config)
        sources = config.select(args.source)
    except (ConfigError, SourceNotFound) as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_CONFIG

    if args.command == 'get' and len(sources) != 1:
        logger.error("get needs exactly one source, use --source")
        return EXIT_CONFIG

    data_dir = args.data_dir or settings.data_dir or config.data_dir
    scheduler = RunScheduler(os.path.expanduser(data_dir)) if data_dir else None
    if args.min_interval > 0 and scheduler is None:
        logger.warning("--min-interval needs a data directory, running every source")

    exit_code = EXIT_OK
    for source in sources:
        exit_code = max(exit_code, run_source(source, args, scheduler))

    logger.info(f"done, exit code {exit_code}")
    return exit_code


if __name__ == '__main__':
    sys.exit(main())
