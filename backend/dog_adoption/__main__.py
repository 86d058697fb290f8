"""Command-line entry point — `python -m dog_adoption` serves the API with uvicorn."""

import argparse
import logging
from typing import Sequence

logger = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Dog Adoption Platform API")
    parser.add_argument("--host", default="0.0.0.0", help="Bind address for the API")
    parser.add_argument(
        "--port",
        type=int,
        default=3000,
        help="Port for the HTTP API (default: 3000)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart the server when source files change (development only)",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    import uvicorn

    args = _parse_args(argv)
    logger.info("Starting Dog Adoption API on http://%s:%s", args.host, args.port)
    uvicorn.run(
        "dog_adoption.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
    )


if __name__ == "__main__":
    main()
