"""
dynaform descriptor server entry point.

Serves the reference in-memory descriptor store over HTTP.

Usage:
    python run_form_server.py
    python run_form_server.py --host 127.0.0.1 --port 9110

    # Use environment variables
    DYNAFORM_SERVER_PORT=9110 python run_form_server.py
"""

import argparse
import asyncio
import logging
import sys

from dynaform.config import get_config
from dynaform.server import run_server


def main():
    """Main entry point."""
    config = get_config()

    parser = argparse.ArgumentParser(
        description="dynaform descriptor server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables:
  DYNAFORM_SERVER_HOST   Host to bind to (default: 0.0.0.0)
  DYNAFORM_SERVER_PORT   Port to listen on (default: 9110)
  DYNAFORM_LOG_LEVEL     Logging level (default: INFO)
        """,
    )

    parser.add_argument(
        "--host",
        default=config.server_host,
        help=f"Host to bind to (default: {config.server_host})",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=config.server_port,
        help=f"Port to listen on (default: {config.server_port})",
    )

    args = parser.parse_args()

    logging.basicConfig(level=config.log_level)
    logger = logging.getLogger("dynaform")

    logger.info(f"Descriptor API: http://{args.host}:{args.port}/api/form")

    try:
        asyncio.run(run_server(host=args.host, port=args.port))
    except KeyboardInterrupt:
        print("\nServer stopped.")
    except Exception as e:
        logger.error(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
