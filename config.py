"""
Configuration settings for the test harness.

Environment-specific values (API base URL, URI prefix, log level) live in
env/.env.<ENV> files. Pick the environment with the ENV variable, e.g.
ENV=QA2 pytest. When ENV is not set the QA1 file is used.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent
ENV_DIR = PROJECT_ROOT / "env"

# Environment used when ENV is not set
DEFAULT_ENV = "QA1"

# Timeout applied to every API call, in milliseconds
API_TIMEOUT_MS = 150000


def load_environment(env=None):
    """
    Load env/.env.<ENV> into os.environ, overriding values already set.

    Args:
        env: Environment name. Falls back to the ENV variable, then QA1.

    Returns:
        Path of the env file that was (or would have been) loaded
    """
    if env is None:
        env = os.getenv("ENV")
    if not env:
        env = DEFAULT_ENV
        os.environ["ENV"] = env
        logger.warning(f"running tests in default environment - {env}")

    env_file = ENV_DIR / f".env.{env}"
    if not env_file.is_file():
        logger.warning(f"Environment file not found: {env_file}")
        return env_file

    load_dotenv(env_file, override=True)
    logger.debug(f"Loaded environment file {env_file}")
    return env_file


# Values are read at call time so a reloaded env file takes effect immediately.

def api_base_url():
    return os.getenv("API_BASEURL")


def api_uri_prefix():
    return os.getenv("API_URI_PREFIX")


def log_level():
    return os.getenv("LOG_LEVEL", "INFO").upper()


def results_dir():
    """Root folder for per-scenario artifacts (logs)."""
    return Path(os.getenv("TEST_RESULTS_DIR", "test-results"))
