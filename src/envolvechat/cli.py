"""Command-line interface for envolvechat.

Prints signed login/logout commands or the widget's HTML tags for the
configured site, and inspects signed commands produced elsewhere.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

EXIT_USAGE = 2


def _add_identity_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--last-name", type=str, default=None, help="User's last name")
    parser.add_argument("--picture-url", type=str, default=None, help="URL of the user's avatar")
    parser.add_argument("--admin", action="store_true", help="Grant chat admin privileges")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="envolvechat",
        description="Signed login/logout commands for the Envolve chat widget",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/envolvechat.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--api-key", type=str, default=None,
        help="Envolve API key (overrides configuration)",
    )
    parser.add_argument(
        "--client-ip", type=str, default=None,
        help="Client IP to bind the command to ('none' disables the check)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    login_parser = subparsers.add_parser("login", help="Print a signed login command")
    login_parser.add_argument("first_name", type=str, help="User's first name or alias")
    _add_identity_args(login_parser)

    subparsers.add_parser("logout", help="Print a signed logout command")

    tags_parser = subparsers.add_parser("tags", help="Print the widget's HTML tags")
    tags_parser.add_argument(
        "first_name", type=str, nargs="?", default=None,
        help="Log this user in; omit to log out",
    )
    _add_identity_args(tags_parser)
    tags_parser.add_argument(
        "--escape", action="store_true", default=None,
        help="Escape quotes and backslashes in the embedded command",
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Decode a signed command and check its signature",
    )
    inspect_parser.add_argument("signed_command", type=str, help="The signed command string")

    return parser.parse_args(argv)


def _login_options(args: argparse.Namespace):
    from envolvechat.domain.models import LoginOptions

    return LoginOptions(
        last_name=args.last_name,
        picture_url=args.picture_url,
        is_admin=args.admin,
    )


def _inspect(signer, signed_command: str) -> None:
    """Print the fields of a signed command and whether it verifies."""
    from envolvechat.signing.protocol import (
        parse_canonical_string,
        parse_signed_command,
        verify_signed_command,
    )

    signed = parse_signed_command(signed_command)
    fields = parse_canonical_string(signed.canonical)
    secret = signer.credential.secret.get_secret_value()

    print(f"command:   {fields.command}")
    print(f"version:   {fields.version}")
    print(f"client ip: {fields.client_ip}")
    print(f"date:      {fields.year}-{fields.month + 1:02d}-{fields.day:02d}")
    for key, value in fields.params.items():
        print(f"  {key} = {value}")
    print(f"signature: {'valid' if verify_signed_command(signed, secret) else 'INVALID'}")


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the envolvechat CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return

    from pydantic import SecretStr

    from envolvechat.config.settings import load_settings
    from envolvechat.errors import InvalidCredentialError, MalformedCommandError
    from envolvechat.signing.signer import CommandSigner
    from envolvechat.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"
    if args.api_key:
        settings.api_key = SecretStr(args.api_key)
    if args.client_ip:
        settings.client_ip = args.client_ip

    setup_logging(settings.logging)

    try:
        signer = CommandSigner.from_settings(settings)

        if args.command == "login":
            print(signer.build_login_command(args.first_name, _login_options(args)))

        elif args.command == "logout":
            print(signer.build_logout_command())

        elif args.command == "tags":
            escape = settings.embed.escape if args.escape is None else args.escape
            options = _login_options(args) if args.first_name else None
            print(signer.render_embed_tags(args.first_name, options, escape=escape))

        elif args.command == "inspect":
            _inspect(signer, args.signed_command)

    except (InvalidCredentialError, MalformedCommandError, ValueError) as e:
        logger.error("%s", e)
        sys.exit(EXIT_USAGE)


if __name__ == "__main__":
    main()
