import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Client configuration settings"""

    # Backend settings
    WEB_APP_URL = os.getenv('SCOUTBOARD_WEB_APP_URL', '')
    REQUEST_TIMEOUT = float(os.getenv('REQUEST_TIMEOUT', 30))
    MAX_RETRIES = int(os.getenv('MAX_RETRIES', 3))

    # App settings
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    LOG_DIR = os.getenv('SCOUTBOARD_LOG_DIR')  # No log file when unset
    VENUE_TIMEZONE = os.getenv('VENUE_TIMEZONE', 'Europe/London')

    # Session settings
    REDIS_URL = os.getenv('REDIS_URL')
    SESSION_KEY = os.getenv('SESSION_KEY', 'performer-rater-session')

    # Trend settings
    TREND_EPSILON = float(os.getenv('TREND_EPSILON', 0.0))

    @classmethod
    def validate(cls):
        """Validate that required configuration is present"""
        if not cls.WEB_APP_URL:
            raise ValueError("SCOUTBOARD_WEB_APP_URL is required")
        if cls.REQUEST_TIMEOUT <= 0:
            raise ValueError("REQUEST_TIMEOUT must be positive")
        if cls.MAX_RETRIES < 1:
            raise ValueError("MAX_RETRIES must be at least 1")
        if cls.TREND_EPSILON < 0:
            raise ValueError("TREND_EPSILON cannot be negative")

        import pytz
        try:
            pytz.timezone(cls.VENUE_TIMEZONE)
        except pytz.UnknownTimeZoneError:
            raise ValueError(f"Unknown VENUE_TIMEZONE: {cls.VENUE_TIMEZONE}")
