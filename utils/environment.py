# Environment configuration and logging utilities
import os
import json
import logging
from typing import Dict, Any
from dotenv import load_dotenv

load_dotenv()

PROVINCES = {"ON", "BC", "AB", "QC", "MB", "SK", "NS", "NB", "NL", "PE", "YT", "NT", "NU"}


def get_environment_config() -> Dict[str, Any]:
    """
    Load and return environment configuration for logging.

    Returns:
        Dict containing environment configuration
    """
    return {
        "APP_NAME": get_app_name(),
        "DEBUG": get_debug_mode(),
        "HOLIDAY_API_URL": get_holiday_api_url(),
        "HOLIDAY_COUNTRY": get_holiday_country(),
        "DEFAULT_PROVINCE": os.environ.get("DEFAULT_PROVINCE", "ON"),
        "HOLIDAY_CACHE_TTL": os.environ.get("HOLIDAY_CACHE_TTL", "86400"),
        "DEFAULT_VACATION_DAYS": os.environ.get("DEFAULT_VACATION_DAYS", "15"),
    }


def log_environment_config(logger: logging.Logger) -> None:
    """
    Log environment configuration.

    Args:
        logger: Logger instance to use for logging
    """
    env_vars = get_environment_config()
    logger.debug("Loaded environment variables:\n%s", json.dumps(env_vars, indent=2))


def validate_required_env() -> None:
    """
    Validate environment variables that must parse.

    Raises:
        RuntimeError: If a variable is set to an unusable value
    """
    for name in ("HOLIDAY_CACHE_TTL", "DEFAULT_VACATION_DAYS"):
        raw = os.environ.get(name)
        if raw is None:
            continue
        try:
            value = float(raw)
        except ValueError:
            raise RuntimeError(f"{name} must be a number, got {raw!r}.")
        if value < 0:
            raise RuntimeError(f"{name} must not be negative.")
    province = os.environ.get("DEFAULT_PROVINCE")
    if province and province.strip().upper() not in PROVINCES:
        raise RuntimeError(f"DEFAULT_PROVINCE {province!r} is not a Canadian province or territory code.")


# Environment variable getters
def get_app_name() -> str:
    return os.environ.get("APP_NAME", "VACATION TRACKER")


def get_debug_mode() -> bool:
    return os.environ.get("DEBUG", "").strip().lower() in ("1", "true", "yes", "on")


def get_holiday_api_url() -> str:
    return os.environ.get("HOLIDAY_API_URL", "https://date.nager.at")


def get_holiday_country() -> str:
    return os.environ.get("HOLIDAY_COUNTRY", "CA")


def get_default_province() -> str:
    return os.environ.get("DEFAULT_PROVINCE", "ON").strip().upper()


def get_holiday_cache_ttl() -> float:
    return float(os.environ.get("HOLIDAY_CACHE_TTL", "86400"))


def get_default_vacation_days() -> float:
    return float(os.environ.get("DEFAULT_VACATION_DAYS", "15"))
