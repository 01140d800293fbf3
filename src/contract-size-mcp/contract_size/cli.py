import argparse
import json
import logging
import sys
import time
from typing import Optional

from .config import load_config
from .render import render_history, render_report, render_scale_frames
from .service import ContractSizeService


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Check deployed contract bytecode size against the 128KB limit.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "--log-level",
        required=False,
        help="Logging level (DEBUG, INFO, WARNING...). Defaults to LOG_LEVEL env or WARNING.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser("check", help="Fetch bytecode and score its size")
    check_parser.add_argument(
        "--address",
        required=True,
        help="Contract address (0x-prefixed, 42 characters).",
    )
    check_parser.add_argument(
        "--network",
        required=False,
        help="Optional network override. Defaults to NETWORK env or monad-testnet.",
    )
    check_parser.add_argument(
        "--variant",
        required=False,
        choices=["A", "B", "a", "b"],
        help="Scoring variant: A (percentage only) or B (percentage + score). Defaults to SCORING_VARIANT env or B.",
    )
    check_parser.add_argument(
        "--format",
        choices=["json", "text"],
        default="json",
        help="Output format.",
    )
    check_parser.add_argument(
        "--animate",
        action="store_true",
        help="With --format text, animate the size-scaled image factor after the report.",
    )

    history_parser = subparsers.add_parser("history", help="Show recent size checks")
    history_parser.add_argument(
        "--format",
        choices=["json", "text"],
        default="json",
        help="Output format.",
    )

    load_parser = subparsers.add_parser("load", help="Show a stored report from history")
    load_parser.add_argument(
        "--address",
        required=True,
        help="Contract address as previously checked (case-insensitive).",
    )
    load_parser.add_argument(
        "--format",
        choices=["json", "text"],
        default="json",
        help="Output format.",
    )

    subparsers.add_parser("clear-history", help="Delete the stored history")

    network_parser = subparsers.add_parser("network-info", help="Show the RPC endpoint and node chain id")
    network_parser.add_argument(
        "--network",
        required=False,
        help="Optional network override. Defaults to NETWORK env or monad-testnet.",
    )

    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _play_scale_animation(target: float, frame_seconds: float = 0.05) -> None:
    for frame in render_scale_frames(target):
        sys.stdout.write(f"\r{frame}")
        sys.stdout.flush()
        time.sleep(frame_seconds)
    sys.stdout.write("\n")


def main(argv: Optional[list[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config()
        _configure_logging(args.log_level or config.log_level)
        service = ContractSizeService(config)
        color = sys.stdout.isatty()

        if args.command == "check":
            result = service.check_contract_size(args.address, args.network, args.variant)
            if args.format == "text":
                print(render_report(result, color=color))
                if args.animate:
                    _play_scale_animation(result["image_scale"])
            else:
                print(json.dumps(result, indent=2))
        elif args.command == "history":
            entries = service.list_history()
            if args.format == "text":
                print(render_history(entries))
            else:
                print(json.dumps(entries, indent=2))
        elif args.command == "load":
            entry = service.load_from_history(args.address)
            if args.format == "text":
                report = dict(entry["report"], address=entry["address"])
                print(render_report(report, color=color))
            else:
                print(json.dumps(entry, indent=2))
        elif args.command == "clear-history":
            print(json.dumps(service.clear_history(), indent=2))
        elif args.command == "network-info":
            print(json.dumps(service.get_network_info(args.network), indent=2))
    except Exception as exc:  # pylint: disable=broad-except
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
