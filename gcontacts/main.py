"""Command line entry point for the Google Contacts client."""

from __future__ import annotations

import argparse
import getpass
import logging
import os
import sys
from typing import Any, Dict, List, Optional, Sequence

from .config.config import Settings, settings
from .errors import ContactsError
from .integration.feed_parser import Contact
from .integration.google_auth import GoogleAuthClient, authentication_url
from .integration.google_contacts_integration import GoogleContactsIntegration

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

logger = logging.getLogger(__name__)


def _init_logging(level: str = "INFO") -> None:
    """Configure root logging once per process."""

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gcontacts", description=__doc__)
    sub = parser.add_subparsers(dest="command", required=True)

    auth_url = sub.add_parser("auth-url", help="print the AuthSub authentication URL")
    auth_url.add_argument("target", nargs="?", default=None)
    auth_url.add_argument("--secure", action="store_true")
    auth_url.add_argument("--session", action="store_true")

    session = sub.add_parser("session-token", help="exchange a one-time token")
    session.add_argument("token")

    login = sub.add_parser("client-login", help="authenticate with email and password")
    login.add_argument("email")

    contacts = sub.add_parser("contacts", help="fetch and print the contact list")
    contacts.add_argument("--token", default=None)
    contacts.add_argument("--user", default=None)
    contacts.add_argument("--limit", type=int, default=None)
    contacts.add_argument("--offset", type=int, default=None)
    contacts.add_argument("--order", default=None)
    contacts.add_argument("--ascending", action="store_true")
    contacts.add_argument("--updated-after", dest="updated_after", default=None)
    contacts.add_argument("--all", dest="fetch_all", action="store_true")
    return parser


def format_contact(contact: Contact) -> str:
    return "\t".join(value or "" for value in contact)


def _fetch_options(args: argparse.Namespace) -> Dict[str, Any]:
    return {
        "limit": args.limit,
        "offset": args.offset,
        "order": args.order,
        "descending": False if args.ascending else None,
        "updated_after": args.updated_after,
    }


def _print_contacts(args: argparse.Namespace, runtime: Settings) -> int:
    token = args.token or runtime.google_auth_token
    if not token:
        logger.error("No token given; pass --token or set GOOGLE_AUTH_TOKEN")
        return 2

    with GoogleContactsIntegration(
        token, args.user or runtime.google_user_id, settings=runtime
    ) as client:
        options = _fetch_options(args)
        if args.fetch_all:
            found: List[Contact] = list(client.iter_contacts(options))
        else:
            found = client.contacts(options)
    for contact in found:
        print(format_contact(contact))
    return 0


def run(argv: Optional[Sequence[str]] = None, runtime: Optional[Settings] = None) -> int:
    runtime = runtime or settings
    args = _build_parser().parse_args(argv)

    if args.command == "auth-url":
        print(
            authentication_url(
                args.target, {"secure": args.secure, "session": args.session}
            )
        )
        return 0

    try:
        if args.command == "contacts":
            return _print_contacts(args, runtime)

        with GoogleAuthClient(settings=runtime) as auth:
            if args.command == "session-token":
                result = auth.session_token(args.token)
            else:
                password = os.getenv("GOOGLE_PASSWORD") or getpass.getpass()
                result = auth.client_login(args.email, password)
    except ContactsError as exc:
        logger.error("Request failed: %s", exc)
        return 1

    if not result:
        logger.error("Google did not return a token")
        return 1
    print(result)
    return 0


def main() -> None:
    _init_logging(settings.log_level)
    sys.exit(run())


if __name__ == "__main__":
    main()
