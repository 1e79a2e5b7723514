"""CLI entry point: python main.py --url https://signals.example.com --tier elite"""

import argparse
import asyncio
import sys

from src.live_stream import (
    LiveSignalStream,
    LiveStreamConfig,
    NotificationKind,
    SignalDirection,
    StreamNotification,
    format_signal_row,
    format_status,
)
from src.logging_config import LogFormat, LoggingConfig, LogLevel, StreamContext, configure_logging
from src.settings import get_settings
from src.subscriptions import get_upgrade_message, has_access, resolve_tier


def _print_notification(note: StreamNotification) -> None:
    marker = "!" if note.variant == "destructive" else "*"
    line = f"[{marker}] {note.title}"
    if note.description:
        line += f": {note.description}"
    print(line)


async def run(args: argparse.Namespace) -> int:
    config = LiveStreamConfig.from_settings(page_url=args.url)

    with StreamContext(subscriber=args.tier, extra={"page_url": config.page_url}):
        async with LiveSignalStream(config) as stream:
            stream.subscribe(_print_notification)
            stream.toggle_streaming()

            if args.test_signal:
                direction = SignalDirection(args.direction) if args.direction else None
                await stream.send_test_signal(args.test_signal, direction)

            await asyncio.sleep(args.duration)

            gave_up = any(
                n.kind == NotificationKind.CONNECTION_FAILED for n in stream.notifications
            )

            print("\n" + "=" * 60)
            print("STREAM STATUS")
            print("=" * 60)
            for line in format_status(stream.status):
                print(f"  {line}")

            print(f"\nLive signals feed ({len(stream.signals)} signals)")
            if not stream.signals:
                print("  No live signals received")
            for signal in stream.signals:
                print(f"  {format_signal_row(signal)}")

    return 1 if gave_up else 0


def main():
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Live trading-signal stream monitor"
    )
    parser.add_argument(
        "--url", default=None,
        help=f"Dashboard page URL (default: {settings.page_url})"
    )
    parser.add_argument(
        "--tier", default=settings.subscription_tier,
        help="Subscription tier of the account (none, pro, elite)"
    )
    parser.add_argument(
        "--duration", type=float, default=60.0,
        help="Seconds to stay connected before printing the feed"
    )
    parser.add_argument(
        "--test-signal", metavar="SYMBOL", default=None,
        help="Ask the backend to broadcast a test signal for SYMBOL"
    )
    parser.add_argument(
        "--direction", choices=[d.value for d in SignalDirection], default=None,
        help="Direction of the test signal (random if omitted)"
    )
    parser.add_argument(
        "--log-format", choices=[f.value for f in LogFormat], default=LogFormat.CONSOLE.value,
        help="Log output format"
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Debug logging"
    )
    args = parser.parse_args()

    configure_logging(LoggingConfig(
        level=LogLevel.DEBUG if args.verbose else LogLevel.INFO,
        format=LogFormat(args.log_format),
    ))

    tier = resolve_tier(args.tier)
    if not has_access(tier, "live_streaming"):
        print(get_upgrade_message("live_streaming"))
        return 2
    args.tier = tier.value

    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
