"""Run the revalidation endpoint with uvicorn."""

import argparse
import logging
import os

import uvicorn

from tagpurge.adapters.fastapi import create_app
from tagpurge.core.entities.revalidation_config import RevalidationConfig


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="tagpurge", description=__doc__)
    parser.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"))
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")))
    parser.add_argument("--route-prefix", default="", help='e.g. "/api"')
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "info"))
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(RevalidationConfig(), route_prefix=args.route_prefix)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()
