"""
Per-scenario state shared by all steps of one scenario.

A ScenarioFixture bundles the scenario name, its DataBag, the session-wide
DataBag, the scenario logger and the API helpers bound to the scenario's
request context. Hooks create one per scenario, attach the feature file it
runs from and finish it with the scenario outcome.
"""

from harness.api.executor import ApiExecutor
from harness.api.manager import ApiManager
from harness.data_bag import DataBag, DataBagKeys
from harness.logger import close_scenario_logger
from harness.results import ScenarioResult


class ScenarioFixture:
    def __init__(self, name, pickle_name, request_context, logger, global_data_bag=None):
        """
        Args:
            name: Unique scenario name (also the log folder name)
            pickle_name: Scenario title as written in the feature file
            request_context: Playwright APIRequestContext for this scenario
            logger: Scenario logger
            global_data_bag: DataBag shared across scenarios
        """
        self.name = name
        self.pickle_name = pickle_name
        self.request_context = request_context
        self.logger = logger
        self.global_data_bag = global_data_bag if global_data_bag is not None else DataBag()
        self.feature_path = None

        self.data_bag = DataBag()
        self.data_bag.save(DataBagKeys.SCENARIO_NAME, name)
        self.data_bag.save(DataBagKeys.PICKLE_NAME, pickle_name)

        self.api_executor = ApiExecutor(self.data_bag, request_context, logger)
        self.api_manager = ApiManager(self.api_executor)

    def start(self):
        self.logger.info(f"Scenario - {self.name} - started")
        self.global_data_bag.save(DataBagKeys.LAST_SCENARIO_EXECUTION_COMPLETED, False)

    def attach_feature(self, feature_path):
        self.feature_path = str(feature_path)
        self.logger.info(f"Feature file path: {self.feature_path}")

    def record_failed_step(self, step_text, error):
        """Remember which step failed and why."""
        self.data_bag.save(DataBagKeys.FAILED_STEP, step_text)
        self.data_bag.save(DataBagKeys.ERROR, str(error))
        self.logger.error(f"Step failed: {step_text}. Error: {error}")

    def scenario_result(self, duration):
        """Result entry for the reports; duration in milliseconds."""
        return ScenarioResult(
            name=self.name,
            duration=duration,
            failed_step=self.data_bag.get(DataBagKeys.FAILED_STEP),
        )

    def finish(self, passed=True):
        if passed:
            self.logger.info(f"Scenario - {self.name} - completed SUCCESSFULLY")
        else:
            self.logger.error(f"Scenario - {self.name} - completed WITH ERRORS")
        self.global_data_bag.save(DataBagKeys.LAST_SCENARIO_EXECUTION_COMPLETED, True)
        close_scenario_logger(self.logger)
