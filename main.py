#!/usr/bin/env python3
"""
MID news archiver: scrape the announcement page, store new items, keep the
HTML snapshot archive and its indexes current.

Modes (INGEST_MODE): "once" runs a single pass, "scheduled" (default) keeps
running the evening/daily/hourly triggers.
"""

import logging
import os
import signal
import sys
import time

import schedule
from dotenv import load_dotenv

from midnews.config import Config
from midnews.pipeline import run_once
from midnews.scheduling import register_schedules

# Load environment variables from .env file
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(os.getenv('LOG_FILE', 'midnews.log'), encoding='utf-8'),
        logging.StreamHandler(sys.stdout)
    ]
)
logger = logging.getLogger(__name__)


class Scraper:
    """Scheduled job wrapper; one failing run never stops the loop"""

    def __init__(self, config: Config):
        self.config = config
        self.shutdown_requested = False
        self._setup_signal_handlers()

    def _setup_signal_handlers(self):
        def signal_handler(signum, frame):
            logger.info(f"Received signal {signum}, initiating graceful shutdown...")
            self.shutdown_requested = True

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    def run_job(self):
        logger.info("=" * 60)
        try:
            report = run_once(self.config)
            logger.info(f"Scrape completed: {report.summary()}")
        except Exception as e:
            logger.error(f"Scrape run failed: {e}", exc_info=True)
        finally:
            logger.info("=" * 60)


def main():
    try:
        try:
            config = Config.from_env()
        except ValueError as e:
            logger.error(f"Configuration error:\n{e}")
            sys.exit(1)

        scraper = Scraper(config)
        mode = (os.environ.get("INGEST_MODE") or "scheduled").lower().strip()
        if mode == "once":
            scraper.run_job()
            return

        register_schedules(schedule.default_scheduler, config.schedules, scraper.run_job)
        logger.info(f"Next run at {schedule.next_run()}")

        while not scraper.shutdown_requested:
            schedule.run_pending()
            time.sleep(5)

        logger.info("Graceful shutdown completed")
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
