"""
Shared fixtures: a fake request context standing in for Playwright, and
steps that script its responses.
"""

import pytest
from pytest_bdd import given, parsers, then

from fakes import FakeRequestContext, FakeResponse
from harness.data_bag import DataBag
from harness.results import ScenarioResults


@pytest.fixture(autouse=True)
def api_env(monkeypatch, tmp_path):
    monkeypatch.setenv("API_BASEURL", "https://api.test")
    monkeypatch.setenv("API_URI_PREFIX", "services/v1")
    monkeypatch.setenv("TEST_RESULTS_DIR", str(tmp_path / "test-results"))


@pytest.fixture(scope="session")
def environment():
    # Tests configure the environment through api_env instead of env files
    return None


@pytest.fixture(scope="session")
def scenario_results(tmp_path_factory):
    results = ScenarioResults(tmp_path_factory.mktemp("scenario-results"))
    results.reset()
    yield results
    results.write_passed()


@pytest.fixture
def fake_request_context():
    return FakeRequestContext()


@pytest.fixture
def request_context(fake_request_context):
    return fake_request_context


@pytest.fixture
def data_bag():
    return DataBag()


@given(parsers.parse("the API responds with status {status:d} and body:"))
def api_responds_with(fake_request_context, status, docstring):
    fake_request_context.response = FakeResponse(status=status, body=docstring)


@then(parsers.parse('the last request carried header "{name}" with value "{value}"'))
def last_request_header(fake_request_context, name, value):
    assert fake_request_context.last_call["headers"][name] == value


@then(parsers.parse('the last request was sent to "{url}"'))
def last_request_url(fake_request_context, url):
    assert fake_request_context.last_call["url"] == url
