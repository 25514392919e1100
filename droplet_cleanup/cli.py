"""Command line entry point: run one droplet sweep and exit."""

from __future__ import annotations
import argparse
import dataclasses
import sys

from .droplets import DigitalOceanAPI
from .handler import run_sweep
from .models import ConfigError, load_config
from .models.config import DEFAULT_CONFIG_PATH
from .reporting import LoggingReporter, send_notification
from .utils import configure_logging, get_logger

logger = get_logger()

EXIT_OK = 0
EXIT_SWEEP_FAILED = 1
EXIT_USAGE = 3


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="droplet-cleanup",
        description="Find DigitalOcean droplets older than a threshold and optionally delete them.",
    )
    parser.add_argument(
        "-c", "--config", default=DEFAULT_CONFIG_PATH, help="Path to configuration file"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log stale droplets without deleting them, whatever the config says",
    )
    return parser, parser.parse_args(argv)


def main(argv=None) -> int:
    parser, args = parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return EXIT_USAGE

    if args.dry_run:
        config = dataclasses.replace(config, delete_stale=False)

    try:
        configure_logging(config.log_dest, config.debug)
    except OSError as e:
        parser.print_usage(sys.stderr)
        print(
            f"{parser.prog}: error: cannot open log destination {config.log_dest}: {e}",
            file=sys.stderr,
        )
        return EXIT_USAGE

    logger.info(
        f"Starting droplet cleanup with config {args.config}",
        extra={"schedule": config.schedule},
    )

    if config.delete_stale:
        logger.info("Stale droplets WILL BE DELETED automatically")
    else:
        logger.info("Stale droplets will be logged, but not deleted")

    api = DigitalOceanAPI(
        token=config.api_key, tag_name=config.tag_name, per_page=config.per_page
    )
    summary = run_sweep(config, api, LoggingReporter(dry_run=config.dry_run))

    send_notification(summary, config.sns_topic_arn)

    return EXIT_OK if summary.ok else EXIT_SWEEP_FAILED


if __name__ == "__main__":
    sys.exit(main())
