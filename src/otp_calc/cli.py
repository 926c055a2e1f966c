"""Command-line interface for otp-calc."""

import argparse
import logging
import sys
import time
from typing import List, Optional

from otp_calc import base32, config
from otp_calc.engine import calculate_otp_data
from otp_calc.errors import OtpError
from otp_calc.request import CalculationRequest
from otp_calc.secret import random_secret
from otp_calc.timer import timer
from otp_calc.truncate import MAX_DIGITS, MIN_DIGITS


log = logging.getLogger(__name__)


def _read_secret(args: argparse.Namespace) -> str:
    if args.ascii_secret is not None:
        return base32.encode(args.ascii_secret.encode("utf-8"))
    # Same normalisation as typing a secret into an authenticator app
    return args.secret.strip().upper()


def _timestamp(args: argparse.Namespace) -> int:
    if args.timestamp is not None:
        return args.timestamp
    return round(time.time())


def build_request(
    args: argparse.Namespace, settings: config.Settings
) -> CalculationRequest:
    """Build a calculation request from parsed arguments and stored defaults."""
    secret = _read_secret(args)
    digits = args.digits if args.digits is not None else settings.digits
    if args.counter is not None:
        return CalculationRequest.hotp(secret, args.counter, digits)

    period = args.period if args.period is not None else settings.period
    return CalculationRequest.totp(secret, _timestamp(args), period, digits)


def code_command(args: argparse.Namespace) -> int:
    """Handle the code command."""
    try:
        request = build_request(args, config.load_settings())
        data = calculate_otp_data(request)
        print(data.code)
        return 0
    except (OtpError, ValueError) as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1


def inspect_command(args: argparse.Namespace) -> int:
    """Handle the inspect command."""
    try:
        request = build_request(args, config.load_settings())
        data = calculate_otp_data(request)
        seconds = timer(request)
    except (OtpError, ValueError) as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1

    details = data.describe()
    print(f"Secret (base32): {request.secret_base32}")
    print(f"Secret bytes:    {details['secret_bytes']}")
    print(f"Counter:         {details['counter_value']}")
    print(f"Counter bytes:   {details['counter_bytes']}")
    print(f"HMAC-SHA1:       {details['hmac']}")
    print(f"Expected OTP:    {details['expected_otp']}")
    if seconds:
        print(f"Time left:       {seconds}s")
    return 0


def timer_command(args: argparse.Namespace) -> int:
    """Handle the timer command."""
    try:
        settings = config.load_settings()
        seconds = timer(
            {
                "unix_timestamp": _timestamp(args),
                "period": (
                    args.period if args.period is not None else settings.period
                ),
            }
        )
        print(seconds)
        return 0
    except (OtpError, ValueError) as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1


def secret_command(args: argparse.Namespace) -> int:
    """Handle the secret command."""
    print(random_secret())
    return 0


def config_command(args: argparse.Namespace) -> int:
    """Handle the config command."""
    try:
        settings = config.load_settings()
        if args.digits is None and args.period is None:
            print(f"Config file: {config.get_config_path()}")
            print(f"  Digits: {settings.digits}")
            print(f"  Period: {settings.period}s")
            return 0

        updated = config.Settings(
            digits=args.digits if args.digits is not None else settings.digits,
            period=args.period if args.period is not None else settings.period,
        )
        path = config.save_settings(updated)
        print(f"✓ Defaults saved to {path}")
        return 0
    except ValueError as e:
        print(f"✗ Failed to update configuration: {e}", file=sys.stderr)
        return 1


def _add_secret_arguments(parser: argparse.ArgumentParser) -> None:
    secret_group = parser.add_mutually_exclusive_group(required=True)
    secret_group.add_argument(
        "--secret",
        "-s",
        help="Shared secret in base32",
    )
    secret_group.add_argument(
        "--ascii-secret",
        default=None,
        help="Shared secret as plain text, e.g. the RFC 4226 test key",
    )

    source_group = parser.add_mutually_exclusive_group()
    source_group.add_argument(
        "--counter",
        "-c",
        type=int,
        default=None,
        help="HOTP counter value (omit for TOTP)",
    )
    source_group.add_argument(
        "--timestamp",
        "-t",
        type=int,
        default=None,
        help="Unix timestamp for TOTP (default: now)",
    )

    parser.add_argument(
        "--period",
        "-p",
        type=int,
        default=None,
        help="TOTP period in seconds (default: from config, 30)",
    )
    parser.add_argument(
        "--digits",
        "-d",
        type=int,
        default=None,
        choices=range(MIN_DIGITS, MAX_DIGITS + 1),
        help="Number of digits in the code (default: from config, 6)",
    )


def make_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="otp-calc",
        description="HOTP/TOTP calculator (RFC 4226, RFC 6238)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log calculation details to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Code command
    code_parser = subparsers.add_parser(
        "code",
        aliases=["gen"],
        help="Print the current TOTP code, or the HOTP code for --counter",
    )
    _add_secret_arguments(code_parser)

    # Inspect command
    inspect_parser = subparsers.add_parser(
        "inspect",
        aliases=["show"],
        help="Print the code together with every intermediate value",
    )
    _add_secret_arguments(inspect_parser)

    # Timer command
    timer_parser = subparsers.add_parser(
        "timer",
        help="Print the seconds left in the current TOTP window",
    )
    timer_parser.add_argument(
        "--timestamp",
        "-t",
        type=int,
        default=None,
        help="Unix timestamp (default: now)",
    )
    timer_parser.add_argument(
        "--period",
        "-p",
        type=int,
        default=None,
        help="TOTP period in seconds (default: from config, 30)",
    )

    # Secret command
    subparsers.add_parser(
        "secret",
        aliases=["random"],
        help="Print a random base32 secret for testing",
    )

    # Config command
    config_parser = subparsers.add_parser(
        "config",
        help="Show or change the stored defaults",
    )
    config_parser.add_argument(
        "--digits",
        "-d",
        type=int,
        default=None,
        help="Default number of digits",
    )
    config_parser.add_argument(
        "--period",
        "-p",
        type=int,
        default=None,
        help="Default TOTP period in seconds",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = make_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if not args.command:
        parser.print_help()
        return 1

    log.debug("Running command %s", args.command)

    if args.command in ("code", "gen"):
        return code_command(args)
    elif args.command in ("inspect", "show"):
        return inspect_command(args)
    elif args.command == "timer":
        return timer_command(args)
    elif args.command in ("secret", "random"):
        return secret_command(args)
    elif args.command == "config":
        return config_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
