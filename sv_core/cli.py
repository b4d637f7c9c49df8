"""
sv command line.

    sv gk [-w] [--dir DIR]          generate a key pair
    sv s SECKEY_FILE < in > out     clear-sign stdin
    sv v [PUBKEY_FILE] < in         verify stdin

Exit status: 0 ok/valid, 1 signature not valid, 2 usage, key, format or I/O error.
"""

from __future__ import annotations
import argparse
import sys
from typing import BinaryIO, List, Optional

from .constants import DIALECT_CRLF, DIALECT_LF, PUBKEY_FILE, SECKEY_FILE
from .dialect import load_dialect
from .errors import SVError
from .keys import generate_keypair, write_keypair, load_private_key, load_public_key
from .logger import get_logger, set_level
from .signer import sign, check

log = get_logger("sv.cli")

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sv", description="Clear-sign and verify text with Ed25519.")
    parser.add_argument("--dialect", choices=[DIALECT_CRLF, DIALECT_LF],
                        help="envelope dialect (default: $SV_DIALECT or crlf)")
    parser.add_argument("--marker", help="marker line separating message and signature")
    parser.add_argument("--width", type=int, help="wrap signature hex at this column (0 = one line)")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ...")

    sub = parser.add_subparsers(dest="command", required=True)

    gk = sub.add_parser("gk", help="generate a key pair")
    gk.add_argument("-w", dest="write", action="store_true",
                    help=f"write '{PUBKEY_FILE}' and '{SECKEY_FILE}' instead of printing")
    gk.add_argument("--dir", default=".", help="directory for -w (default: current)")

    s = sub.add_parser("s", help="sign stdin to stdout")
    s.add_argument("seckey", help="private key file (hex)")

    v = sub.add_parser("v", help="verify stdin")
    v.add_argument("pubkey", nargs="?", help="public key file (hex); default: key embedded in the envelope")
    return parser


def _cmd_gk(args, out: BinaryIO) -> int:
    if args.write:
        pub_path, sec_path = write_keypair(args.dir)
        out.write(f"Key pair generated and saved in '{pub_path}' and '{sec_path}' files.\n".encode())
    else:
        pub_hex, priv_hex = generate_keypair()
        out.write(f"{pub_hex}\n{priv_hex}\n".encode("ascii"))
    return EXIT_OK


def _cmd_s(args, dialect, inp: BinaryIO, out: BinaryIO) -> int:
    priv = load_private_key(args.seckey)
    out.write(sign(inp.read(), priv, dialect=dialect))
    return EXIT_OK


def _cmd_v(args, dialect, inp: BinaryIO, out: BinaryIO) -> int:
    pub = load_public_key(args.pubkey) if args.pubkey else None
    result = check(inp.read(), pub, dialect=dialect)
    if result.valid:
        out.write(b"Signature is valid.\n")
        return EXIT_OK
    out.write(b"Signature is not valid.\n")
    return EXIT_INVALID


def main(argv: Optional[List[str]] = None, stdin: Optional[BinaryIO] = None,
         stdout: Optional[BinaryIO] = None) -> int:
    args = build_parser().parse_args(argv)
    out = stdout if stdout is not None else sys.stdout.buffer

    try:
        if args.log_level:
            set_level(args.log_level)
        dialect = load_dialect({"dialect": args.dialect, "marker": args.marker, "line_width": args.width})
        if args.command == "gk":
            return _cmd_gk(args, out)
        if args.command == "s":
            return _cmd_s(args, dialect, stdin if stdin is not None else sys.stdin.buffer, out)
        return _cmd_v(args, dialect, stdin if stdin is not None else sys.stdin.buffer, out)
    except (SVError, OSError, ValueError) as e:
        log.error(f"{args.command} failed: {e}")
        sys.stderr.write(f"sv: {e}\n")
        return EXIT_ERROR
    finally:
        out.flush()


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
