"""Environment-driven configuration."""

import logging
import os
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

SCHEDULE_RE = re.compile(r"^(?:[01]\d|2[0-3])?:[0-5]\d$")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class Config:
    """Scraper, archive and schedule settings with validation"""

    # Source page
    main_page_url: str = "https://mid.ru/ru/foreign_policy/news/"
    page_content_class: str = "page-content"
    announce_item_class: str = "announce__item"

    # Browser
    incognito: bool = True
    headless: bool = True
    chromedriver_path: str = ""
    wait_timeout: float = 10.0          # seconds

    # Throttling between article loads (milliseconds)
    random_delay_min: int = 2000
    random_delay_max: int = 5000

    # Schedules: "HH:MM" daily, ":MM" hourly
    cron_evening: str = "21:00"
    cron_daily: str = "09:00"
    cron_hourly: str = ":05"

    # Storage
    base_dir: str = "mid-news"
    db_path: str = "mid_news.db"
    pg_dsn: str = ""
    lock_file: str = "state/midnews.lock"

    # Read API
    api_host: str = "127.0.0.1"
    api_port: int = 5005

    @classmethod
    def from_env(cls) -> 'Config':
        """Load and validate configuration from environment variables"""
        config = cls(
            main_page_url=os.getenv('MID_MAIN_PAGE', cls.main_page_url),
            page_content_class=os.getenv('MID_PAGE_CONTENT_CLASS', cls.page_content_class),
            announce_item_class=os.getenv('MID_ANNOUNCE_ITEM_CLASS', cls.announce_item_class),

            incognito=_env_bool('MID_INCOGNITO', 'true'),
            headless=_env_bool('MID_HEADLESS', 'true'),
            chromedriver_path=os.getenv('CHROMEDRIVER_PATH', ''),
            wait_timeout=float(os.getenv('MID_WAIT_TIMEOUT', '10')),

            random_delay_min=int(os.getenv('MID_RANDOM_DELAY_MIN', '2000')),
            random_delay_max=int(os.getenv('MID_RANDOM_DELAY_MAX', '5000')),

            cron_evening=os.getenv('MID_CRON_EVENING', cls.cron_evening),
            cron_daily=os.getenv('MID_CRON_DAILY', cls.cron_daily),
            cron_hourly=os.getenv('MID_CRON_HOURLY', cls.cron_hourly),

            base_dir=os.getenv('MID_BASE_DIR', cls.base_dir),
            db_path=os.getenv('DB_PATH', cls.db_path),
            pg_dsn=os.getenv('PG_DSN', '').strip(),
            lock_file=os.getenv('LOCK_FILE', cls.lock_file),

            api_host=os.getenv('API_HOST', cls.api_host),
            api_port=int(os.getenv('API_PORT', '5005')),
        )

        config.validate()
        return config

    @property
    def schedules(self):
        return {
            'evening': self.cron_evening,
            'daily': self.cron_daily,
            'hourly': self.cron_hourly,
        }

    def validate(self):
        """Validate configuration values"""
        errors = []

        if not self.main_page_url.startswith(('http://', 'https://')):
            errors.append("MID_MAIN_PAGE must be an http(s) URL")
        if not self.page_content_class.strip():
            errors.append("MID_PAGE_CONTENT_CLASS is required")
        if not self.announce_item_class.strip():
            errors.append("MID_ANNOUNCE_ITEM_CLASS is required")

        if self.random_delay_min < 0 or self.random_delay_max < 0:
            errors.append("MID_RANDOM_DELAY_MIN/MAX must be non-negative")
        elif self.random_delay_max < self.random_delay_min:
            errors.append("MID_RANDOM_DELAY_MAX must not be below MID_RANDOM_DELAY_MIN")

        if self.wait_timeout <= 0 or self.wait_timeout > 300:
            errors.append("MID_WAIT_TIMEOUT should be between 0 and 300 seconds")

        for name, expr in self.schedules.items():
            if not SCHEDULE_RE.match(expr or ''):
                errors.append(f"Invalid {name} schedule {expr!r} (expected HH:MM or :MM)")

        if not self.base_dir.strip():
            errors.append("MID_BASE_DIR is required")

        if errors:
            error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {error}" for error in errors)
            raise ValueError(error_msg)

        logger.info(f"Configuration validated. Store: {'Postgres' if self.pg_dsn else 'SQLite ' + self.db_path}")
