"""
Scenario result reports under TEST_RESULTS_DIR.

Passed scenarios are grouped by feature file and written once, at the end of
the session, to passed-scenarios.json. A failed scenario is merged right away
into failed/<feature>-failed-scenarios.json, so failures survive an aborted run.
"""

import json
import logging
import re
import shutil
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

PASSED_FILE = "passed-scenarios.json"
FAILED_DIR = "failed"


class ScenarioResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    duration: float
    retries: int = 0
    failed_step: Optional[str] = Field(default=None, alias="failedStep")


class FeatureResult(BaseModel):
    name: str
    path: str
    scenarios: List[ScenarioResult] = Field(default_factory=list)


def sanitize_filename(name):
    return re.sub(r"[^a-zA-Z0-9\-_]", "_", name)[:50].lower()


def feature_name(path):
    """Feature file name without directory and .feature extension."""
    return Path(path).name.replace(".feature", "")


def _dump(result):
    return result.model_dump(by_alias=True, exclude_none=True)


class ScenarioResults:
    def __init__(self, results_dir):
        self.results_dir = Path(results_dir)
        self.failed_dir = self.results_dir / FAILED_DIR
        self.passed = {}

    @property
    def passed_file(self):
        return self.results_dir / PASSED_FILE

    def failed_file(self, path):
        return self.failed_dir / f"{sanitize_filename(feature_name(path))}-failed-scenarios.json"

    def reset(self):
        """Drop reports left over from a previous run."""
        self.passed.clear()
        if self.passed_file.exists():
            self.passed_file.unlink()
        shutil.rmtree(self.failed_dir, ignore_errors=True)
        self.failed_dir.mkdir(parents=True, exist_ok=True)

    def record(self, path, result, passed):
        if passed:
            self.add_passed(path, result)
        else:
            self.write_failed(path, result)

    def add_passed(self, path, result):
        path = str(path)
        if path not in self.passed:
            self.passed[path] = FeatureResult(name=feature_name(path), path=path)
        self.passed[path].scenarios.append(result)

    def write_failed(self, path, result):
        path = str(path)
        failed_file = self.failed_file(path)
        feature = FeatureResult(name=feature_name(path), path=path)
        if failed_file.exists():
            try:
                existing = json.loads(failed_file.read_text(encoding="utf-8"))
                feature.scenarios = FeatureResult.model_validate(existing).scenarios
            except ValueError as e:
                logger.error(f"Could not read {failed_file}, starting it over. Error: {e}")
        feature.scenarios.append(result)

        self.failed_dir.mkdir(parents=True, exist_ok=True)
        failed_file.write_text(json.dumps(_dump(feature), indent=2), encoding="utf-8")
        logger.info(f"Written failed feature result to {failed_file}")
        return failed_file

    def write_passed(self):
        self.results_dir.mkdir(parents=True, exist_ok=True)
        self.passed_file.write_text(json.dumps([_dump(feature) for feature in self.passed.values()], indent=2), encoding="utf-8")
        logger.info(f"Results written to {self.passed_file}")
        return self.passed_file
