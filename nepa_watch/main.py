"""Main entry point for the NEPA Watch feed builder."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import signal
import sys
import threading
import time
from pathlib import Path
from typing import Optional, Sequence, Tuple

from nepa_watch.config.environment import EnvironmentConfig
from nepa_watch.config.exceptions import ConfigurationError
from nepa_watch.config.loader import load_config, validate_config_file
from nepa_watch.config.models import AppConfig
from nepa_watch.feeds.exceptions import FeedError
from nepa_watch.logging import get_logger
from nepa_watch.logging.config import configure_logging
from nepa_watch.pipeline import FeedPipeline, PipelineRunResult
from nepa_watch.reconciliation.engine import RunAbortedError
from nepa_watch.scheduler import SchedulerService

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and settle the effective log level.

    Log level priority: CLI > LOG_LEVEL environment variable > config file.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level

    return app_config, env_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nepa-watch",
        description="NEPA Watch - builds RSS feeds of BLM ePlanning NEPA projects",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml, config/config.yaml, feeds/searches.json)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Build the feeds once and exit instead of polling on a schedule",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate the configuration file and exit",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    return parser


def log_run_summary(result: PipelineRunResult) -> None:
    if result.skipped:
        return
    logger.info(
        f"Feed build completed: "
        f"{result.term_count} terms, "
        f"{result.total_fetched} fetched, "
        f"{result.record_count} unique records, "
        f"{result.state_feed_count} state feeds",
        extra={
            "event": "service.build.completed",
            "duration_seconds": result.total_duration_seconds,
            "had_errors": result.had_errors,
            "failed_terms": result.failed_term_count,
        },
    )


def scheduled_build(pipeline: FeedPipeline) -> None:
    """Scheduler job: a failed build is logged and the next interval tries again."""
    try:
        log_run_summary(pipeline.run_once())
    except (RunAbortedError, FeedError) as e:
        logger.error(
            f"Feed build failed: {e}",
            extra={"event": "service.build.failed", "error_type": type(e).__name__},
        )


def run_daemon(pipeline: FeedPipeline, interval_seconds: int) -> None:
    shutdown_event = threading.Event()
    scheduler_service = SchedulerService(
        pipeline_callable=lambda: scheduled_build(pipeline),
        interval_seconds=interval_seconds,
        shutdown_event=shutdown_event,
    )

    def signal_handler(signum, frame):
        logger.info(
            f"Received signal {signum}, shutting down",
            extra={"event": "service.signal_received", "signal": signum},
        )
        scheduler_service.shutdown(wait=False)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    scheduler_service.start()
    logger.info(
        "Scheduler started. Press Ctrl+C to stop",
        extra={"event": "service.daemon_mode.started"},
    )

    try:
        shutdown_event.wait()
    except KeyboardInterrupt:
        logger.info(
            "Keyboard interrupt received, shutting down",
            extra={"event": "service.keyboard_interrupt"},
        )
        scheduler_service.shutdown(wait=False)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for NEPA Watch.

    Returns:
        Exit code: 0 on success, 1 on a configuration error or a failed build
    """
    start_time = time.time()
    args = build_parser().parse_args(argv)

    if args.validate:
        config_path = args.config or Path("config.yaml")
        return 0 if validate_config_file(config_path) else 1

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)
        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        logger.info(
            "NEPA Watch starting",
            extra={
                "event": "service.starting",
                "config_path": str(args.config) if args.config else None,
                "log_level": env_config.log_level,
                "once": args.once,
            },
        )
        logger.info(
            "Configuration loaded",
            extra={
                "event": "config.loaded",
                "query_count": len(app_config.queries),
                "search_count": len(app_config.searches),
                "state_count": len(app_config.states),
                "browser_enabled": app_config.browser.enabled,
                "poll_interval_seconds": app_config.poll_interval_seconds,
            },
        )

        pipeline = FeedPipeline(app_config)

        if args.once:
            log_run_summary(pipeline.run_once())
        else:
            run_daemon(pipeline, app_config.poll_interval_seconds)

        logger.info(
            "NEPA Watch stopped",
            extra={
                "event": "service.stopping",
                "uptime_seconds": round(time.time() - start_time, 2),
            },
        )
        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return 1
    except (RunAbortedError, FeedError) as e:
        logger.error(
            f"Feed build failed: {e}",
            extra={"event": "service.build.failed", "error_type": type(e).__name__},
        )
        print(f"Feed build failed: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nShutdown requested by user", file=sys.stderr)
        return 0
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error during feed build",
            extra={
                "event": "service.failed",
                "error_type": type(e).__name__,
                "error": str(e),
            },
            exc_info=True,
        )
        return 1


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
