"""Command-line entry point - `python -m contactform` / `contactform`.

Invariants:
    - Flags override environment settings; unspecified flags keep env/defaults
    - The resulting Settings are immutable for the process lifetime
"""

import argparse

import uvicorn

from contactform.config import Settings
from contactform.main import create_app


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contactform", description="Contact Form API Server",
    )
    parser.add_argument("-p", "--port", type=int, help="listening port (default 8080)")
    parser.add_argument(
        "-d", "--domain", dest="allowed_domain",
        help="allowed site domain (default localhost)",
    )
    parser.add_argument("--host", help="bind address (default 0.0.0.0)")
    parser.add_argument("--database-url", help="SQLAlchemy async database URL")
    parser.add_argument(
        "--require-origin", dest="require_origin_header",
        action="store_true", default=None,
        help="also demand a matching Origin header",
    )
    return parser


def settings_from_args(argv: list[str] | None = None) -> Settings:
    args = build_parser().parse_args(argv)
    overrides = {k: v for k, v in vars(args).items() if v is not None}
    return Settings(**overrides)


def main(argv: list[str] | None = None) -> None:
    settings = settings_from_args(argv)
    uvicorn.run(
        create_app(settings), host=settings.host, port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
