#!/usr/bin/env python3
"""
Kalistheniks CLI.

Usage:
    kalistheniks serve [--host 0.0.0.0] [--port 8080]
    kalistheniks init-db [--db path/to/kalistheniks.db]
    kalistheniks verify-token <token>
"""

import argparse
import sys
from typing import Optional, List

from rich.console import Console

from .config import get_settings
from .exceptions import TokenInvalidError

console = Console()


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from .main import create_app
    from .utils.log_sanitizer import configure_logging

    settings = get_settings()
    configure_logging(settings.log_level)
    host = args.host or settings.api_host
    port = args.port or settings.api_port
    console.print(f"[bold green]Serving Kalistheniks API[/] on {host}:{port}")
    uvicorn.run(create_app(settings), host=host, port=port)
    return 0


def cmd_init_db(args: argparse.Namespace) -> int:
    from .db.repositories import SessionRepository, UserRepository

    db_path = args.db or str(get_settings().database_path)
    UserRepository(db_path)
    SessionRepository(db_path)
    console.print(f"[green]Schema ready[/] at {db_path}")
    return 0


def cmd_verify_token(args: argparse.Namespace) -> int:
    from .api.deps import get_token_codec

    try:
        subject = get_token_codec().verify(args.token)
    except TokenInvalidError as e:
        console.print(f"[red]Invalid token[/] ({e.reason})")
        return 1
    console.print(f"[green]Valid[/] subject={subject}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kalistheniks", description="Kalistheniks API tools")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.set_defaults(func=cmd_serve)

    init_db = sub.add_parser("init-db", help="Create database tables")
    init_db.add_argument("--db", default=None, help="SQLite file path")
    init_db.set_defaults(func=cmd_init_db)

    verify = sub.add_parser("verify-token", help="Check a token against the configured secret")
    verify.add_argument("token")
    verify.set_defaults(func=cmd_verify_token)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
