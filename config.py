# /config.py
import os
import logging
from dotenv import load_dotenv
from typing import Any, Type

# --- Load .env File ---
# Load environment variables from .env file if it exists
# Searches current directory and parents.
load_dotenv()

log = logging.getLogger(__name__)


def get_env_variable(
    var_name: str,
    default: Any = None,
    required: bool = False,
    var_type: Type[Any] = str
) -> Any:
    """
    Retrieves an environment variable cast to str, int or float.

    Args:
        var_name: Name of the environment variable
        default: Default value if variable is not set
        required: Whether the variable is required
        var_type: Type to cast the value to (str, int or float)

    Returns:
        The environment variable value cast to the specified type

    Raises:
        ValueError: If required variable is not set or type casting fails
    """
    raw_value = os.getenv(var_name)

    # Inline comments are allowed in .env files ("KEY=value # note")
    value_cleaned = raw_value.split('#')[0].strip() if raw_value is not None else ''

    if not value_cleaned:
        if required:
            raise ValueError(f"Required environment variable '{var_name}' is not set or empty.")
        return default if default is not None else var_type()

    try:
        return var_type(value_cleaned)
    except ValueError as e:
        raise ValueError(
            f"Invalid value format for environment variable '{var_name}'. "
            f"Received cleaned value '{value_cleaned}' which cannot be converted to {var_type.__name__}."
        ) from e


def get_secret_variable(var_name: str) -> str:
    """Like get_env_variable, but never strips '#' since secrets may contain it."""
    raw_value = os.getenv(var_name)
    if raw_value is None:
        return ''
    return raw_value.strip()


# --- Logging ---
try:
    LOG_LEVEL = get_env_variable("LOG_LEVEL", "INFO", var_type=str).upper()
except ValueError as e:
    print(f"Error processing LOG_LEVEL, using INFO default: {e}")
    LOG_LEVEL = "INFO"

# --- API Keys ---
# Not required at import time: missing credentials surface when a token is requested.
TWITTER_CONSUMER_KEY: str = get_secret_variable("TWITTER_CONSUMER_KEY")
TWITTER_SECRET: str = get_secret_variable("TWITTER_SECRET")

# --- Twitter Endpoints ---
TWITTER_TOKEN_URL = get_env_variable("TWITTER_TOKEN_URL", "https://api.twitter.com/oauth2/token")
TWITTER_SEARCH_URL = get_env_variable("TWITTER_SEARCH_URL", "https://api.twitter.com/1.1/search/tweets.json")

# --- Search Parameters ---
TWITTER_SEARCH_COUNT = get_env_variable("TWITTER_SEARCH_COUNT", 100, var_type=int)  # Max 100 per request, no paging
TWITTER_RESULT_TYPE = get_env_variable("TWITTER_RESULT_TYPE", "recent")  # recent / popular / mixed
HTTP_TIMEOUT = get_env_variable("HTTP_TIMEOUT", 30.0, var_type=float)  # Seconds

# --- File Locations ---
SEARCH_OUTPUT_PATH = get_env_variable("SEARCH_OUTPUT_PATH", os.path.join("data", "test.tsv"))
LABELED_OUTPUT_PATH = get_env_variable("LABELED_OUTPUT_PATH", os.path.join("data", "labeled.csv"))
