"""
Command line demos.

Usage:
  python3 -m blockcrack detect [-n ROUNDS]
  python3 -m blockcrack suffix [--harder] [--prefix-min N --prefix-max N] [--secret TEXT] [-v]
  python3 -m blockcrack forge [EMAIL] [-v]
"""

import argparse
import sys

from .attack import detect
from .attack.ecb import oracle_attack, token_forgery


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="blockcrack",
                                     description="ECB/CBC modes and chosen-plaintext attacks on ECB")
    sub = parser.add_subparsers(dest="command", required=True)

    p_detect = sub.add_parser("detect", help="guess ECB/CBC for random encryptions")
    p_detect.add_argument("-n", "--rounds", type=int, default=10)

    p_suffix = sub.add_parser("suffix", help="byte-at-a-time recovery of the secret suffix")
    p_suffix.add_argument("--harder", action="store_true", help="oracle prepends a random prefix")
    p_suffix.add_argument("--prefix-min", type=int, default=1)
    p_suffix.add_argument("--prefix-max", type=int, default=64)
    p_suffix.add_argument("--secret", help="secret to append instead of the default one")
    p_suffix.add_argument("-v", "--verbose", action="store_true")

    p_forge = sub.add_parser("forge", help="forge an admin profile token")
    p_forge.add_argument("email", nargs="?", default="me@test.com")
    p_forge.add_argument("-v", "--verbose", action="store_true")

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "detect":
        return detect.main(args.rounds)

    if args.command == "suffix":
        if args.prefix_min < 0 or args.prefix_max < args.prefix_min:
            print("[!] Error: need 0 <= --prefix-min <= --prefix-max")
            return 1
        secret = args.secret.encode() if args.secret is not None else None
        return oracle_attack.main(harder=args.harder,
                                  prefix_range=(args.prefix_min, args.prefix_max),
                                  secret=secret, verbose=args.verbose)

    return token_forgery.main(args.email, verbose=args.verbose)


if __name__ == "__main__":
    sys.exit(main())
