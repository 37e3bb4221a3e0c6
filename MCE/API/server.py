# =============================================================================
# server.py — Development server entry point
# =============================================================================
#
# Usage:
#   python -m MCE.API.server
#   python -m MCE.API.server --host 0.0.0.0 --port 8080
#   mce-server --static-dir ./public
#
# Settings come from the environment (see MCE/API/config.py); command-line
# flags override them.  For production, serve create_app() from a WSGI server.
# =============================================================================

from __future__ import annotations
import argparse
import logging
from dataclasses import replace

from .app import create_app
from .config import ServerConfig


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Musical CAPTCHA server")
    parser.add_argument("--host", help="Bind address (env HOST, default 127.0.0.1)")
    parser.add_argument("--port", type=int, help="Listen port (env PORT, default 3000)")
    parser.add_argument(
        "--delivery", choices=["audio", "notes"],
        help="Challenge delivery variant (env MCE_DELIVERY, default audio)",
    )
    parser.add_argument("--static-dir", help="Directory with index.html and client assets")
    args = parser.parse_args(argv)

    cfg = ServerConfig.from_env()
    overrides = {
        "host": args.host, "port": args.port,
        "delivery": args.delivery, "static_dir": args.static_dir,
    }
    cfg = replace(cfg, **{k: v for k, v in overrides.items() if v is not None})

    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    )

    app = create_app(cfg)
    app.logger.info("listening at http://%s:%d", cfg.host, cfg.port)
    app.run(host=cfg.host, port=cfg.port)


if __name__ == "__main__":
    main()
