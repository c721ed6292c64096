import argparse
import sys

import uvicorn

from namecast.config import Config, get_config_summary
from namecast.housekeeper import Housekeeper
from namecast.logger import Logger, session_logger
from namecast.web_server import NamecastWebServer

logger: Logger = session_logger


def main() -> None:
    parser = argparse.ArgumentParser(
        description="namecast Web Server - personalized image batch generation REST API"
    )
    parser.add_argument(
        "--host",
        type=str,
        default="0.0.0.0",
        help="Host address to bind to (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=Config.get_web_port(),
        help="Port number to listen on (default: 8020, or NAMECAST_WEB_PORT env var)",
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help="Directory for uploads and renders (default: NAMECAST_DATA_DIR or ./data)",
    )
    args = parser.parse_args()

    if args.data_dir:
        Config.set_data_dir(args.data_dir)

    try:
        Config.ensure_directories()
    except OSError as e:
        logger.error("FATAL: Data directory could not be created", error=str(e))
        sys.exit(1)

    server = NamecastWebServer()
    housekeeper = Housekeeper(
        server.session_manager,
        ttl_minutes=Config.get_session_ttl_minutes(),
        interval_minutes=Config.get_housekeeping_interval_mins(),
    )

    try:
        logger.info("Starting web server", host=args.host, port=args.port, **get_config_summary())
        housekeeper.start()
        uvicorn.run(server.app, host=args.host, port=args.port)
        logger.info("Web server shutdown complete")
    except KeyboardInterrupt:
        logger.info("Web server stopped by user")
        sys.exit(0)
    except Exception as e:
        logger.error("Failed to start web server", error=str(e), error_type=type(e).__name__)
        sys.exit(1)
    finally:
        housekeeper.stop()


if __name__ == "__main__":
    main()
