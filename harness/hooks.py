"""
Scenario hooks as pytest fixtures.

Load with pytest_plugins = ["harness.hooks"]. Per session: the environment file
is loaded once, one Playwright instance is started, one global DataBag is
created and the scenario result reports are reset and, at the end, written.
Per scenario: a fresh request context, DataBag and log file.
"""

import pytest
from playwright.sync_api import sync_playwright

import config
from harness.data_bag import DataBag
from harness.fixture import ScenarioFixture
from harness.logger import scenario_name, setup_scenario_logger
from harness.results import ScenarioResults


@pytest.fixture(scope="session")
def environment():
    return config.load_environment()


@pytest.fixture(scope="session")
def playwright_instance(environment):
    with sync_playwright() as p:
        yield p


@pytest.fixture(scope="session")
def global_data_bag():
    return DataBag()


@pytest.fixture(scope="session")
def scenario_results(environment):
    results = ScenarioResults(config.results_dir())
    results.reset()
    yield results
    results.write_passed()


@pytest.fixture
def request_context(playwright_instance):
    context = playwright_instance.request.new_context()
    yield context
    context.dispose()


@pytest.fixture
def scenario_fixture(request, environment, global_data_bag, scenario_results, request_context):
    name = scenario_name(request.node.name)
    fixture = ScenarioFixture(
        name=name,
        pickle_name=request.node.name,
        request_context=request_context,
        logger=setup_scenario_logger(name),
        global_data_bag=global_data_bag,
    )
    fixture.start()
    yield fixture

    report = getattr(request.node, "report_call", None)
    passed = report is not None and report.passed
    fixture.finish(passed=passed)
    if fixture.feature_path is not None:
        duration = report.duration * 1000 if report is not None else 0
        scenario_results.record(fixture.feature_path, fixture.scenario_result(duration), passed)


@pytest.fixture
def api_executor(scenario_fixture):
    return scenario_fixture.api_executor


@pytest.fixture
def api_manager(scenario_fixture):
    return scenario_fixture.api_manager


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"report_{report.when}", report)


def pytest_bdd_before_scenario(request, feature, scenario):
    scenario_fixture = request.getfixturevalue("scenario_fixture")
    scenario_fixture.attach_feature(feature.filename)


def pytest_bdd_step_error(request, feature, scenario, step, step_func, step_func_args, exception):
    scenario_fixture = request.getfixturevalue("scenario_fixture")
    scenario_fixture.record_failed_step(step.name, exception)
