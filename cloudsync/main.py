"""
CLI entry point.

Loads configuration, configures logging, and prints the ``subscriptions/modify``
request that would create every declared subscription.
"""

from __future__ import annotations

import argparse
import json
import sys

import structlog

from .config import level_number, load_config
from .operations import SubscriptionEndpoint, endpoint_path, modify_request


def configure_logging(level: str = "info", fmt: str = "json") -> None:
    """
    Send structlog output to stderr at ``level`` or above.

    stdout is reserved for the rendered request, so ``fmt="text"`` output is
    rendered without colors.
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if fmt == "json"
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_number(level)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def run(argv: list[str] | None = None) -> None:
    """Render declared subscriptions as a modify request."""
    parser = argparse.ArgumentParser(description="Render cloud sync subscriptions")
    parser.add_argument(
        "-c", "--config",
        default="subscriptions.yaml",
        help="Path to configuration file (default: subscriptions.yaml)",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default: 2)",
    )
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        subscriptions = config.build_subscriptions()
    except FileNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except Exception as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        sys.exit(1)

    configure_logging(config.logging.level, config.logging.format)
    log = structlog.get_logger()
    log.info(
        "cli.config_loaded",
        config_path=args.config,
        container=config.container.identifier,
        subscriptions=len(subscriptions),
    )

    output = {
        "path": endpoint_path(config.container, SubscriptionEndpoint.MODIFY),
        "body": modify_request(creates=subscriptions),
    }
    print(json.dumps(output, indent=args.indent or None))


if __name__ == "__main__":
    run()
