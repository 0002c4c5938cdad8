#!/usr/bin/env python3
"""
otp_cli.py - CLI wrapper around otp_core.py

Subcommands:
- new-secret : generate a random Base32 secret
- code       : print the current TOTP code once
- watch      : show the TOTP code in real time with a countdown
- hotp       : HOTP code for a given counter
- verify     : verify a TOTP or HOTP code

The secret comes from --secret or the OTP_SECRET environment variable and
is never written to disk.

eg..:
    otp-generator new-secret
    otp-generator code --secret JBSWY3DPEHPK3PXP
    OTP_SECRET=JBSWY3DPEHPK3PXP otp-generator watch
    otp-generator hotp --counter 42 --secret JBSWY3DPEHPK3PXP
    otp-generator verify totp --code 123456 --secret JBSWY3DPEHPK3PXP
"""

import argparse
import logging
import os
import sys
import time

from . import otp_core
from .errors import OTPError
from .session import OTPSession

logger = logging.getLogger(__name__)

SECRET_ENV = "OTP_SECRET"

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ERROR = 2


class MissingSecret(OTPError):
    """Neither --secret nor OTP_SECRET was given."""


def resolve_secret(args) -> str:
    secret = args.secret or os.environ.get(SECRET_ENV)
    if not secret:
        raise MissingSecret(f"No secret given. Pass --secret or set {SECRET_ENV}.")
    return secret.strip()


def resolve_time(args):
    return args.at if args.at is not None else time.time()


# --- CLI command handlers ---
def cmd_help(args):
    print("No command specified. Use -h for help.")
    return EXIT_ERROR


def cmd_new_secret(args):
    print(otp_core.generate_base32_secret(args.length))
    return EXIT_OK


def cmd_code(args):
    code, remaining = otp_core.totp(resolve_secret(args), resolve_time(args))
    print(f"TOTP: {code}  (valid ~{remaining:2d}s)")
    return EXIT_OK


def cmd_watch(args):
    secret = args.secret or os.environ.get(SECRET_ENV)
    session = OTPSession(secret.strip() if secret else None)
    if not secret:
        print(f"[*] Generated secret: {session.secret}")

    print("Press Ctrl+C to quit. Generating TOTP in real time...\n")
    try:
        while True:
            now = time.time()
            last_code = session.code
            code = session.refresh(now)
            remaining = session.seconds_remaining(now)
            if code != last_code:
                print(f"TOTP: {code}  (valid ~{remaining:2d}s)")
            else:
                print(f".. {remaining:2d}s left", end="\r", flush=True)
            time.sleep(1)
    except KeyboardInterrupt:
        print("\nBye.")
    return EXIT_OK


def cmd_hotp(args):
    code = otp_core.hotp(resolve_secret(args), args.counter)
    print(f"HOTP(counter={args.counter}): {code}")
    return EXIT_OK


def cmd_verify_totp(args):
    ok = otp_core.verify_totp(resolve_secret(args), args.code, resolve_time(args))
    if ok:
        print("[+] TOTP code is VALID")
        return EXIT_OK
    print("[-] TOTP code is INVALID")
    return EXIT_INVALID


def cmd_verify_hotp(args):
    ok = otp_core.verify_hotp(resolve_secret(args), args.code, args.counter)
    if ok:
        print(f"[+] HOTP code is VALID (counter = {args.counter})")
        return EXIT_OK
    print("[-] HOTP code is INVALID")
    return EXIT_INVALID


# --- Argparse builder ---
def _add_common(p: argparse.ArgumentParser, with_time: bool = False) -> None:
    p.add_argument("--secret", help=f"Base32 secret (default: ${SECRET_ENV})")
    if with_time:
        p.add_argument("--at", type=float, help="Unix time to use instead of now")
    p.add_argument("--verbose", action="store_true", help="Verbose output")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="otp-generator", description="TOTP/HOTP (HMAC-SHA1) generator and verifier")
    sub = p.add_subparsers(dest="cmd")
    p.set_defaults(func=cmd_help, verbose=False)

    # new-secret
    pn = sub.add_parser("new-secret", help="Generate a random Base32 secret")
    pn.add_argument("--length", type=int, default=otp_core.SECRET_LENGTH, help="Number of Base32 characters")
    pn.add_argument("--verbose", action="store_true", help="Verbose output")
    pn.set_defaults(func=cmd_new_secret)

    # code
    pc = sub.add_parser("code", help="Print the current TOTP code")
    _add_common(pc, with_time=True)
    pc.set_defaults(func=cmd_code)

    # watch
    pw = sub.add_parser("watch", help="Show TOTP code in real time")
    _add_common(pw)
    pw.set_defaults(func=cmd_watch)

    # hotp
    ph = sub.add_parser("hotp", help="Generate HOTP code for a specific counter")
    ph.add_argument("--counter", type=int, required=True)
    _add_common(ph)
    ph.set_defaults(func=cmd_hotp)

    # verify
    pv = sub.add_parser("verify", help="Verify an OTP code (TOTP or HOTP)")
    sub_v = pv.add_subparsers(dest="verify_type")
    pv.set_defaults(func=cmd_help)

    pvt = sub_v.add_parser("totp", help="Verify a TOTP code (current window only)")
    pvt.add_argument("--code", required=True, help="OTP code to verify")
    _add_common(pvt, with_time=True)
    pvt.set_defaults(func=cmd_verify_totp)

    pvh = sub_v.add_parser("hotp", help="Verify a HOTP code")
    pvh.add_argument("--code", required=True, help="OTP code to verify")
    pvh.add_argument("--counter", type=int, required=True, help="HOTP counter")
    _add_common(pvh)
    pvh.set_defaults(func=cmd_verify_hotp)

    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except (OTPError, ValueError) as e:
        logger.debug("Command %s failed", args.cmd, exc_info=True)
        print(f"[!] {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
