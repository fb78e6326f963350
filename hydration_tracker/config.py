"""Configuration management"""
import os
from pathlib import Path
from dotenv import load_dotenv
import pytz

load_dotenv()

# Storage
# - 'file' (default): one JSON snapshot per key under DATA_PATH
# - 'redis': snapshots stored as Redis string values
# - 'memory': nothing survives a restart (tests, demos)
STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "file").lower()
DATA_PATH: Path = Path(os.getenv("DATA_PATH", "./data"))
REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")

# Local clock used for calendar dates and reminder firing times
USER_TIMEZONE: str = os.getenv("USER_TIMEZONE", "UTC")

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Telegram notification transport
TELEGRAM_BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", "")
# Empty chat id means notification permission has not been granted
TELEGRAM_CHAT_ID: str = os.getenv("TELEGRAM_CHAT_ID", "")

# Hydration rules
REMINDER_STRATEGY: str = os.getenv("REMINDER_STRATEGY", "evenly_spaced").lower()
UNSPECIFIED_GENDER_RATE: str = os.getenv("UNSPECIFIED_GENDER_RATE", "female").lower()

VALID_STORAGE_BACKENDS = ("file", "redis", "memory")
VALID_REMINDER_STRATEGIES = ("evenly_spaced", "fixed_interval")
VALID_GENDER_RATES = ("male", "female")


# Validation
def validate_config() -> None:
    """Validate configuration values"""
    if STORAGE_BACKEND not in VALID_STORAGE_BACKENDS:
        raise ValueError(
            f"STORAGE_BACKEND must be one of {', '.join(VALID_STORAGE_BACKENDS)}, got '{STORAGE_BACKEND}'"
        )
    if REMINDER_STRATEGY not in VALID_REMINDER_STRATEGIES:
        raise ValueError(
            f"REMINDER_STRATEGY must be one of {', '.join(VALID_REMINDER_STRATEGIES)}, got '{REMINDER_STRATEGY}'"
        )
    if UNSPECIFIED_GENDER_RATE not in VALID_GENDER_RATES:
        raise ValueError(
            f"UNSPECIFIED_GENDER_RATE must be 'male' or 'female', got '{UNSPECIFIED_GENDER_RATE}'"
        )
    try:
        pytz.timezone(USER_TIMEZONE)
    except pytz.exceptions.UnknownTimeZoneError:
        raise ValueError(
            f"Invalid USER_TIMEZONE: '{USER_TIMEZONE}'. Use IANA timezone (e.g., 'Europe/Stockholm')"
        )
    # Telegram settings are optional: without them reminders run headless
