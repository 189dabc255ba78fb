"""
Console demo: prints the TOTP tokens around the current time.

    python -m totpkit
    python -m totpkit --secret JBSWY3DPEHPK3PXP --digits 8 --watch
"""

import argparse
import datetime
import logging
import time
from typing import List, Optional

from . import base32
from .exceptions import OTPError
from .otp import DEFAULT_DIGITS
from .totp import DEFAULT_INTERVAL, TOTP

# RFC 4226 Appendix D test secret
DEFAULT_KEY = b"12345678901234567890"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="totpkit", description="Print TOTP tokens for the current time window.")
    p.add_argument("--secret", help="Base32 secret (defaults to the RFC 4226 test key)")
    p.add_argument("--digits", type=int, default=DEFAULT_DIGITS, help="Number of OTP digits")
    p.add_argument("--interval", type=int, default=DEFAULT_INTERVAL, help="TOTP time step (seconds)")
    p.add_argument("--window", type=int, default=4, help="Number of earlier counters to show")
    p.add_argument("--watch", action="store_true", help="Refresh every second until Ctrl+C")
    p.add_argument("--verbose", action="store_true", help="Debug logging")
    return p


def render(totp: TOTP, size: int, for_time: Optional[datetime.datetime] = None) -> str:
    if for_time is None:
        for_time = datetime.datetime.now(datetime.timezone.utc)
    lines = ["TOTP Generated:\t{}".format(for_time.astimezone().strftime("%H:%M:%S"))]
    for counter, token in totp.window(for_time, size=size):
        lines.append("TOTP Counter:\t{}".format(counter))
        lines.append("TOTP Token:\t{}".format(token))
    lines.append("Expires in:\t{}s".format(totp.remaining(for_time)))
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    try:
        key = base32.decode(args.secret) if args.secret else DEFAULT_KEY
        totp = TOTP(key, digits=args.digits, interval=args.interval)
        # Fail on a bad window size before printing anything
        totp.window(size=args.window)
    except OTPError as e:
        parser.error(str(e))

    print("Secret (Base32):\t{}".format(base32.encode(key)))
    print(render(totp, args.window))
    if not args.watch:
        return 0

    try:
        while True:
            time.sleep(1)
            print()
            print(render(totp, args.window))
    except KeyboardInterrupt:
        print("\n#END")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
