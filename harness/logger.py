"""
Scenario-scoped logging.

Every scenario gets its own named logger writing to
<results dir>/logs/<scenario name>/log.log, so a failing scenario's log can be
read on its own. The level comes from LOG_LEVEL (INFO by default).
"""

import logging
import re
import time

import config

LOG_FORMAT = "%(asctime)s.%(msecs)03d [%(levelname)-8s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %I:%M:%S %p"


def scenario_name(test_name):
    """
    Build a unique, filesystem-safe scenario name: <test name>-<epoch millis>.

    Args:
        test_name: Name of the running test or pickle

    Returns:
        Scenario name usable as a folder name
    """
    safe = re.sub(r"[^\w\-\[\]]+", "-", test_name).strip("-")
    return f"{safe}-{int(time.time() * 1000)}"


def setup_scenario_logger(name, results_dir=None):
    """
    Create (or reset) the logger for one scenario.

    Handlers from a previous setup of the same logger are removed first, so
    calling this twice does not duplicate output.

    Args:
        name: Scenario name, also used as the log folder name
        results_dir: Root artifacts folder. Defaults to config.results_dir()

    Returns:
        Configured logging.Logger
    """
    if results_dir is None:
        results_dir = config.results_dir()

    log_level = getattr(logging, config.log_level(), logging.INFO)

    logger = logging.getLogger(f"scenario.{name}")
    logger.setLevel(log_level)
    close_scenario_logger(logger)
    logger.propagate = False

    log_file = results_dir / "logs" / name / "log.log"
    log_file.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(log_level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(file_handler)
    return logger


def close_scenario_logger(logger):
    """Detach and close every handler of a scenario logger."""
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
