"""Entry point for the menu-kiosk Textual app."""

from __future__ import annotations

import argparse

from kiosk.client import OrderApiClient
from kiosk.config import API_BASE_URL, POLL_INTERVAL_SECONDS
from kiosk.debuglog import configure_logging
from kiosk.kiosk_app import MenuKioskApp
from kiosk.workflow import CartWorkflow


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="menu-kiosk", description="Browse a menu, submit orders and follow their status.")
    parser.add_argument("user_email", help="Owner of the menu to browse")
    parser.add_argument("--serial", default=None, help="Device serial number used to filter ready orders")
    parser.add_argument("--api", default=API_BASE_URL, help=f"Order API base URL (default: {API_BASE_URL})")
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=POLL_INTERVAL_SECONDS,
        help=f"Seconds between order status polls (default: {POLL_INTERVAL_SECONDS:g})",
    )
    parser.add_argument("--log-file", default=None, help="Debug log path")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    if args.poll_interval <= 0:
        build_parser().error("--poll-interval must be positive")

    configure_logging(args.log_file)
    workflow = CartWorkflow(OrderApiClient(base_url=args.api), args.user_email, serial_number=args.serial)
    MenuKioskApp(workflow, poll_interval=args.poll_interval).run()


if __name__ == "__main__":
    main()
