#!/usr/bin/env python3
"""Run the fake gateway as a standalone HTTP server.

Point the system under test's gateway SDK at the printed base URL. Settings
come from the environment (see ``GatewayConfig.from_env``) and can be
overridden on the command line.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import uvicorn

from fake_gateway.api import create_app
from fake_gateway.config import GatewayConfig
from fake_gateway.logging import get_logger, setup_logging

logger = get_logger("fake_gateway.server")


def build_config(args: argparse.Namespace) -> GatewayConfig:
    """Apply command-line overrides on top of the environment config."""
    config = GatewayConfig.from_env()
    if args.host is not None:
        config.server.host = args.host
    if args.port is not None:
        config.server.port = args.port
    if args.merchant_id is not None:
        config.merchant_id = args.merchant_id
    if args.seed is not None:
        config.seed = args.seed
    if args.decline_all_cards:
        config.decline_all_cards = True
    if args.log_level is not None:
        config.log_level = args.log_level
    if args.json_logs:
        config.log_format = "json"
    return config


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Run the fake payment gateway")
    parser.add_argument("--host", type=str, default=None, help="Bind address (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=None, help="Bind port (default: 3000)")
    parser.add_argument("--merchant-id", type=str, default=None, help="Merchant id to accept")
    parser.add_argument("--seed", type=int, default=None, help="Seed for generated card data")
    parser.add_argument(
        "--decline-all-cards",
        action="store_true",
        help="Start with every authorization declined",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: INFO)",
    )
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    args = parser.parse_args()

    config = build_config(args)
    setup_logging(config.log_level, config.log_format)

    logger.info("Fake gateway listening on %s", config.server.base_url)
    logger.info("Merchant id: %s", config.merchant_id)

    uvicorn.run(
        create_app(config=config),
        host=config.server.host,
        port=config.server.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
