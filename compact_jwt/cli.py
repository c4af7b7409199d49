"""
Command line entry point for compact-jwt.

``compact-jwt encode`` signs claims given as options; ``compact-jwt decode``
verifies a token (passed as an argument or piped via stdin) and prints its
header and payload.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time

from .algorithms import Algorithm
from .claims import ClaimSet
from .config import ValidationConfig, load_config
from .decoder import decode, load
from .encoder import encode
from .errors import CompactJWTError, InvalidTokenError

__all__ = ["main"]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Output formatting
# ---------------------------------------------------------------------------

def _print_json(label: str, data: dict) -> None:
    """Print a labelled JSON section."""
    print(f"\n{label}:")
    print(json.dumps(data, indent=4))


def _parse_pair(text: str) -> tuple[str, object]:
    """Split ``key=value``; the value is read as JSON when it parses."""
    key, sep, raw = text.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected key=value, got {text!r}")
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        value = raw
    return key, value


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="compact-jwt",
        description="Encode and verify HMAC-signed JSON Web Tokens.",
        epilog="Examples:\n"
               "  %(prog)s encode --secret s3cret --iss example.com --exp-in 3600\n"
               "  %(prog)s decode <token> --secret s3cret\n"
               "  echo '<token>' | %(prog)s decode - --no-verify\n",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    enc = sub.add_parser("encode", help="Sign claims into a token")
    enc.add_argument("--secret", default="", help="HMAC secret")
    enc.add_argument("--algorithm", default="HS256", help="none, HS256, HS384 or HS512")
    enc.add_argument("--iss", help="Issuer claim")
    enc.add_argument("--aud", help="Audience claim")
    enc.add_argument("--exp-in", type=float, help="Expire this many seconds from now")
    enc.add_argument("--nbf-in", type=float, help="Not valid until this many seconds from now")
    enc.add_argument("--iat", action="store_true", help="Add an issued-at claim for now")
    enc.add_argument("--claim", action="append", type=_parse_pair, default=[],
                     metavar="KEY=VALUE", help="Custom claim (repeatable)")
    enc.add_argument("--header", action="append", type=_parse_pair, default=[],
                     metavar="KEY=VALUE", help="Extra header field (repeatable)")

    dec = sub.add_parser("decode", help="Verify a token and print its contents")
    dec.add_argument("token", help="JWT token string, or - to read stdin")
    dec.add_argument("--secret", default="", help="HMAC secret")
    dec.add_argument("--algorithm", action="append", dest="algorithms",
                     help="Accepted algorithm (repeatable, default HS256)")
    dec.add_argument("--no-verify", action="store_true", help="Skip signature verification")
    dec.add_argument("--leeway", type=float, help="Clock skew tolerance in seconds")
    dec.add_argument("--issuer", help="Required issuer")
    dec.add_argument("--audience", help="Required audience")
    dec.add_argument("--config", help="JSON file with validation settings")
    return parser


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _cmd_encode(args: argparse.Namespace) -> int:
    algorithm = Algorithm.from_name(args.algorithm, args.secret)
    now = time.time()

    claims = ClaimSet()
    if args.iss:
        claims.issuer = args.iss
    if args.aud:
        claims.audience = args.aud
    if args.exp_in is not None:
        claims.expiration = int(now + args.exp_in)
    if args.nbf_in is not None:
        claims.not_before = int(now + args.nbf_in)
    if args.iat:
        claims.issued_at = int(now)
    for key, value in args.claim:
        claims[key] = value

    print(encode(claims, algorithm, headers=dict(args.header)))
    return 0


def _cmd_decode(args: argparse.Namespace) -> int:
    token = sys.stdin.read().strip() if args.token == "-" else args.token.strip()
    if not token:
        print("Error: No token received.")
        return 1

    config = load_config(args.config) if args.config else ValidationConfig()
    if args.algorithms:
        config.algorithms = args.algorithms
    if args.no_verify:
        config.verify = False
    if args.leeway is not None:
        config.leeway = args.leeway
    if args.issuer:
        config.issuer = args.issuer
    if args.audience:
        config.audience = args.audience

    payload = decode(token, config.algorithms_for(args.secret), **config.decode_kwargs())
    _print_json("Header", load(token).header)
    _print_json("Payload", payload)
    return 0


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        if args.command == "encode":
            return _cmd_encode(args)
        return _cmd_decode(args)
    except InvalidTokenError as exc:
        print(f"Error: {exc}")
        return 1
    except (CompactJWTError, ValueError) as exc:
        print(f"Error: {exc}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
