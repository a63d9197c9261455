"""Command-line interface for execomp.

Screens an exchange for executives whose compensation is at least a
multiple of their industry's average.

Usage:
    execomp screen
    execomp screen --exchange ASX --format json
    execomp screen --multiple 1.25
"""

import argparse
import asyncio
import contextlib
import json
import logging
import signal
import sys
from typing import Optional

from execomp import __version__
from execomp.clients import CompanyInfoClient
from execomp.config import Settings, settings
from execomp.errors import CompensationError, RunCancelledError
from execomp.models import ExecutiveCompensation
from execomp.pipeline import build_coordinator

logger = logging.getLogger(__name__)

# Exit codes
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CANCELLED = 130


def positive_float(value: str) -> float:
    """argparse type for a strictly positive number."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from None
    if not number > 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {value}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser.

    Returns:
        Configured ArgumentParser with all commands and arguments.
    """
    parser = argparse.ArgumentParser(
        prog="execomp",
        description="execomp — executive compensation screener",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  execomp screen
  execomp screen --exchange ASX --format json
  execomp screen --multiple 1.25
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    screen_parser = subparsers.add_parser(
        "screen",
        help="List executives paid above their industry benchmark",
        description="Fetch every listed company's executives and compare them to industry benchmarks",
    )
    screen_parser.add_argument(
        "--exchange",
        type=str,
        default=None,
        help="Exchange short name (default: EXCHANGE setting, ASX)",
    )
    screen_parser.add_argument(
        "--multiple",
        type=positive_float,
        default=None,
        help="Benchmark multiple to clear (default: COMPENSATION_MULTIPLE setting, 1.10)",
    )
    screen_parser.add_argument(
        "--format",
        type=str,
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    subparsers.add_parser(
        "version",
        help="Show version information",
    )

    return parser


async def screen(
    config: Settings,
    exchange: str,
    cancel: asyncio.Event | None = None,
) -> list[ExecutiveCompensation]:
    """Run one screening against the live CompanyInfo service."""
    if not config.service_api_key:
        raise ValueError("Configuration is missing SERVICE_API_KEY. Set it in the environment or .env")

    async with CompanyInfoClient(
        api_key=config.service_api_key,
        base_url=config.company_info_base_url,
        rate_limit=config.provider_rate_limit,
        timeout=config.provider_timeout,
        max_retries=config.provider_max_retries,
        max_connections=config.max_concurrent_requests,
    ) as client:
        coordinator = build_coordinator(config, client)
        return await coordinator.run(exchange, cancel=cancel)


def _run_async(config: Settings, exchange: str) -> list[ExecutiveCompensation]:
    """Run a screening on a fresh event loop; Ctrl-C sets the cancel signal."""

    async def _main() -> list[ExecutiveCompensation]:
        cancel = asyncio.Event()
        loop = asyncio.get_running_loop()
        # Signal handlers are unavailable on some platforms
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(signal.SIGINT, cancel.set)
        try:
            return await screen(config, exchange, cancel=cancel)
        finally:
            with contextlib.suppress(NotImplementedError):
                loop.remove_signal_handler(signal.SIGINT)

    return asyncio.run(_main())


def format_text(results: list[ExecutiveCompensation], exchange: str) -> str:
    """Render results as an aligned plain-text table."""
    if not results:
        return f"No executives on {exchange} above their industry benchmark."
    width = max(len(r.name_and_position) for r in results)
    lines = [f"{'Executive':<{width}}  {'Compensation':>14}  {'Industry avg':>14}"]
    for r in results:
        lines.append(
            f"{r.name_and_position:<{width}}  {r.compensation:>14,.2f}  {r.average_industry_compensation:>14,.2f}"
        )
    return "\n".join(lines)


def cmd_screen(args: argparse.Namespace) -> int:
    """Execute the screen command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 success, 1 failure, 130 cancelled)
    """
    config = settings
    if args.multiple is not None:
        config = settings.model_copy(update={"compensation_multiple": args.multiple})
    exchange = (args.exchange or config.exchange).upper()

    logger.info("Screening %s (multiple=%.2f)", exchange, config.compensation_multiple)

    try:
        results = _run_async(config, exchange)
    except (KeyboardInterrupt, RunCancelledError):
        logger.warning("Interrupted by user")
        return EXIT_CANCELLED
    except CompensationError as e:
        logger.error("Screening failed [%s]: %s", e.kind.value, e.detail)
        print(f"Error: {e.detail}", file=sys.stderr)
        return EXIT_FAILURE
    except Exception as e:
        logger.error("Screening failed: %s", e, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if args.format == "json":
        print(json.dumps([r.to_dict() for r in results], indent=2))
    else:
        print(format_text(results, exchange))
    return EXIT_OK


def cmd_version(args: argparse.Namespace) -> int:
    """Execute the version command."""
    print(f"execomp v{__version__}")
    print("Executive compensation screener")
    return EXIT_OK


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command == "screen":
        return cmd_screen(args)
    elif args.command == "version":
        return cmd_version(args)
    else:
        parser.print_help()
        return EXIT_OK


def cli_entry() -> None:
    """Console script entry point for setuptools."""
    sys.exit(main())


if __name__ == "__main__":
    cli_entry()
