"""Main entry point for Cadence."""

from __future__ import annotations

import argparse
import logging
import sys

from .config import get_config


def setup_logging() -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Cadence - Conversational pattern learning engine"
    )
    parser.add_argument(
        "--mode",
        choices=["server", "maintain"],
        default="server",
        help="Run mode: 'server' runs the MCP server, "
        "'maintain' runs periodic decay and cleanup on the snapshot (default: server)",
    )
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse", "streamable-http"],
        default=None,
        help="Transport mode for server mode (default: from env or stdio)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="In maintain mode, run a single pass and exit",
    )
    return parser.parse_args(argv)


def main() -> None:
    """Run Cadence."""
    setup_logging()
    logger = logging.getLogger(__name__)

    args = parse_args()
    config = get_config()

    logger.info("Starting Cadence")
    logger.info(f"Data directory: {config.data_dir}")
    logger.info(f"Mode: {args.mode}")

    if args.mode == "maintain":
        from .worker.maintenance import MaintenanceWorker

        worker = MaintenanceWorker(config=config)
        if args.once:
            worker.run_once()
        else:
            worker.run_forever()
        return

    from .server import mcp

    transport = args.transport or config.server_transport
    logger.info(f"Transport: {transport}")
    if transport != "stdio":
        mcp.settings.host = config.server_host
        mcp.settings.port = config.server_port
    mcp.run(transport=transport)


if __name__ == "__main__":
    main()
