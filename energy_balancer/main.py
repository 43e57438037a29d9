#!/usr/bin/env python3
"""
Energy Balancer - Main Entry Point

Builds the default equipment fleet, runs the scheduler for a fixed time
and then stops and joins it before exiting.

Usage:
    energy-balancer [--interval SECONDS] [--run-seconds SECONDS] [--strict]

Author: Factlabel
Version: 1.0.0
"""

import argparse
import logging
import sys

from PyQt6.QtCore import QCoreApplication, QTimer

from . import APP_DOMAIN, APP_NAME, APP_ORGANIZATION, APP_VERSION
from .config import build_optimizer, validate_scheduler_params
from .core import EnergyScheduler, InvalidConfiguration

logger = logging.getLogger(__name__)


def setup_application(argv):
    """Setup QCoreApplication with application metadata"""
    app = QCoreApplication.instance() or QCoreApplication(argv)

    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)
    app.setOrganizationName(APP_ORGANIZATION)
    app.setOrganizationDomain(APP_DOMAIN)

    return app


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="energy-balancer", description=APP_NAME)
    parser.add_argument("--interval", type=float, default=None,
                        help="seconds between matching passes")
    parser.add_argument("--run-seconds", type=float, default=None,
                        help="how long to run before stopping the scheduler")
    parser.add_argument("--max-passes", type=int, default=None,
                        help="stop after this many passes")
    parser.add_argument("--strict", action="store_true",
                        help="stop when a consumer finds no eligible source")
    return parser.parse_args(argv)


def main(argv=None):
    """Main application entry point"""
    logging.basicConfig(level=logging.INFO)
    args = parse_args(argv)

    try:
        params = validate_scheduler_params({
            "interval": args.interval,
            "run_seconds": args.run_seconds,
            "max_passes": args.max_passes,
            "strict": args.strict or None,
        })
        optimizer = build_optimizer(strict=params["strict"], history_limit=params["history_limit"])
        app = setup_application(sys.argv[:1])
        scheduler = EnergyScheduler(optimizer, params["interval"], params["max_passes"])
    except InvalidConfiguration as e:
        logger.error("Configuration error: %s", e)
        return 1

    failures = []
    scheduler.status_updated.connect(print)
    scheduler.scheduler_failed.connect(failures.append)
    scheduler.finished.connect(app.quit)

    stop_timer = QTimer()
    stop_timer.setSingleShot(True)
    stop_timer.timeout.connect(scheduler.stop)
    stop_timer.start(int(params["run_seconds"] * 1000))

    scheduler.start()
    app.exec()

    # Join the worker before the process exits
    stop_timer.stop()
    scheduler.stop_and_wait()
    # Deliver signals queued after the event loop quit
    QCoreApplication.processEvents()

    logger.info("Ran %d pass(es)", optimizer.pass_count)
    print(optimizer.history_frame().to_string())
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
