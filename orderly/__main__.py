"""
Run the order service.

    python -m orderly --port 8080
"""

import argparse

import uvicorn

from orderly.config import Settings
from orderly.logs import setup_logging
from orderly.wire import create_app


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="orderly", description="Order-management HTTP service")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8080)
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    setup_logging(settings.log_level, settings.log_file)

    uvicorn.run(create_app(settings), host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
