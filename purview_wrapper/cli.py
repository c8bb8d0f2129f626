"""Command line over the Purview helpers.

Usage:
  python main.py labels
  python main.py label-inheritance <label-id> [<label-id> ...]
  python main.py offline --prompt "..." --response "..." --session-id s1
"""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Optional, Sequence

import requests

from .auth import AuthManager
from .config import Settings, load_settings
from .content_processing import EVALUATE_OFFLINE, ContentProcessingClient, enqueue_offline_tasks
from .exceptions import PurviewError
from .labels import LabelClient
from .logging_setup import configure_file_logging
from .protection_scope import ProtectionScopeClient

logger = logging.getLogger(__name__)

# /me endpoints need a delegated (user) token
ME_COMMANDS = ("protection-scope", "offline")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="purview-wrapper",
                                     description="Call Microsoft Graph / Purview data security and governance APIs")
    parser.add_argument("--interactive", action="store_true", help="Allow interactive login for public clients")
    parser.add_argument("--log-dir", default=None, help="Directory for the rotating log file")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("protection-scope", help="Compute the protection scope and print body and etag (user sign-in only)")
    sub.add_parser("labels", help="List sensitivity labels with rights and sublabels")

    rights = sub.add_parser("sublabel-rights", help="Rights for one label")
    rights.add_argument("label_id")

    inherit = sub.add_parser("label-inheritance", help="Compute the label inherited from several labels")
    inherit.add_argument("label_ids", nargs="+")

    offline = sub.add_parser("offline", help="Submit a prompt/response pair for offline evaluation (user sign-in only)")
    offline.add_argument("--prompt", required=True)
    offline.add_argument("--response", required=True)
    offline.add_argument("--session-id", required=True)
    offline.add_argument("--sequence-no", type=int, default=0)
    offline.add_argument("--upload-mode", default=EVALUATE_OFFLINE)
    offline.add_argument("--download-mode", default=EVALUATE_OFFLINE)
    offline.add_argument("--name", default="Purview API Sample")
    offline.add_argument("--application-id", default=None, help="Defaults to CLIENT_ID")
    offline.add_argument("--etag", default=None, help="Skip the protection scope call and use this etag")
    return parser


def run_command(args: argparse.Namespace, token: str, settings: Settings,
                session: Optional[requests.Session] = None) -> str:
    """Dispatch one parsed command and return the text to print."""
    if args.command == "protection-scope":
        result = ProtectionScopeClient(settings, session).compute_protection_scope(token)
        return json.dumps({"etag": result.etag, "body": result.body}, indent=2)

    if args.command in ("labels", "sublabel-rights", "label-inheritance"):
        labels = LabelClient(settings, session)
        if args.command == "labels":
            return labels.fetch_sensitivity_labels(token)
        if args.command == "sublabel-rights":
            return labels.fetch_sub_label_rights(token, args.label_id)
        return labels.compute_label_inheritance(token, args.label_ids)

    etag = args.etag
    if etag is None:
        etag = ProtectionScopeClient(settings, session).compute_protection_scope(token).etag
        if not etag:
            logger.warning("Protection scope response carried no etag; sending an empty If-None-Match")
    return enqueue_offline_tasks(
        ContentProcessingClient(settings, session), token, etag,
        args.name, args.application_id or os.getenv("CLIENT_ID", ""), args.upload_mode, args.download_mode,
        args.prompt, args.response, args.session_id, args.sequence_no,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    level = os.getenv("LOG_LEVEL", "INFO").upper()
    log_path = configure_file_logging(args.log_dir, logger_names=["purview_wrapper", "msal"], level=level)
    print(f"Logging to {log_path}", file=sys.stderr)

    try:
        settings = load_settings()
        auth = AuthManager()
    except (PurviewError, ValueError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2

    if auth.client_mode == "confidential" and args.command in ME_COMMANDS:
        logger.warning("'%s' calls /me endpoints, which reject app-only tokens; "
                       "unset CLIENT_SECRET to sign in as a user", args.command)

    token = auth.get_token(interactive=args.interactive)
    if not token:
        print("No access token obtained. Try --interactive for public clients or check your app credentials.",
              file=sys.stderr)
        return 2

    try:
        with requests.Session() as session:
            print(run_command(args, token, settings, session))
    except (PurviewError, requests.RequestException) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
