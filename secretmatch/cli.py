"""Command-line front end: run the server or take part in a comparison."""

from __future__ import annotations

import argparse
import getpass
import sys
from collections.abc import Callable
from collections.abc import Sequence

import secretmatch.runtime as runtime
from secretmatch.client.commitment import compute_commitment
from secretmatch.client.errors import ProtocolError
from secretmatch.client.invite import InvalidInviteError
from secretmatch.client.invite import InviteLink
from secretmatch.client.invite import parse_invite
from secretmatch.client.protocol import EqualityProtocolClient
from secretmatch.core.logging import setup_logging
from secretmatch.main import run as run_server

SecretPrompt = Callable[[str], str]


def render_result(match: bool) -> str:
    """Render the verdict line shown to the participant."""
    if match:
        return "MATCH: you both entered the same string"
    return "NO MATCH: the other person did not enter your string"


def run_comparison(
    client: EqualityProtocolClient,
    invite: InviteLink,
    prompt: SecretPrompt = getpass.getpass,
    out: Callable[[str], None] = print,
) -> bool:
    """Join the room, ask for the secret once paired, submit and report."""
    out(f"Waiting for the other person to join room {invite.room_id}.")
    client.join(invite.room_id)
    secret = prompt("Secret string (hidden): ")
    out("Waiting for the other person to submit their string.")
    match = client.submit(invite.room_id, compute_commitment(secret, invite.salt))
    out(render_result(match))
    return match


def _cmd_serve(args: argparse.Namespace) -> int:
    run_server(host=args.host, port=args.port)
    return 0


def _cmd_create(args: argparse.Namespace) -> int:
    with EqualityProtocolClient(args.server, wait_timeout_seconds=args.wait_timeout) as client:
        invite = client.start_session()
        print(f"Send this invite link to the other person:\n  {invite.url}")
        run_comparison(client, invite)
    return 0


def _cmd_join(args: argparse.Namespace) -> int:
    invite = parse_invite(args.invite)
    with EqualityProtocolClient(invite.base_url, wait_timeout_seconds=args.wait_timeout) as client:
        run_comparison(client, invite)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="secretmatch",
        description="Check whether two people hold the same secret without revealing it.",
    )
    parser.add_argument("--log-level", default=None, help="override SECRETMATCH_LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="run the rendezvous server")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.set_defaults(handler=_cmd_serve)

    create = subparsers.add_parser("create", help="create a room and print an invite link")
    create.add_argument("--server", required=True, help="base URL of the rendezvous server")
    create.add_argument("--wait-timeout", type=float, default=None, help="seconds to wait for the peer")
    create.set_defaults(handler=_cmd_create)

    join = subparsers.add_parser("join", help="join a room from an invite link")
    join.add_argument("invite", help="invite link received from the room creator")
    join.add_argument("--wait-timeout", type=float, default=None, help="seconds to wait for the peer")
    join.set_defaults(handler=_cmd_join)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level or runtime.settings.secretmatch_log_level, runtime.settings.secretmatch_log_file)
    try:
        return args.handler(args)
    except InvalidInviteError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except ProtocolError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
