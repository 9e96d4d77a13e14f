"""
API step definitions.

Load together with the hooks:
    pytest_plugins = ["harness.hooks", "harness.steps.api_steps"]

Data tables use the first row as the header row, e.g.
    Given the following additional headers:
      | X-Client | X-Trace |
      | qa       | abc     |
"""

from pytest_bdd import given, parsers, then, when

from harness.api.auth_headers import AuthHeaders
from harness.api.models import SampleApiRequest
from harness.data_bag import DataBagKeys


def table_to_records(datatable):
    """Turn a Gherkin data table (list of rows) into one dict per data row."""
    if not datatable:
        return []
    header, *rows = datatable
    return [dict(zip(header, row)) for row in rows]


@given(parsers.parse('the API auth token is "{token}"'))
def api_auth_token(scenario_fixture, token):
    scenario_fixture.data_bag.save(DataBagKeys.AUTH_HEADERS, AuthHeaders(token=token))


@given("the following additional headers:")
def additional_headers(api_executor, datatable):
    api_executor.save_additional_headers(table_to_records(datatable))


@given("the following query parameters:")
def query_parameters(api_executor, datatable):
    api_executor.save_query_params(table_to_records(datatable))


@when("the sample endpoint is called", target_fixture="sample_result")
def call_sample_endpoint(api_manager):
    return api_manager.call_sample_endpoint(SampleApiRequest())


@when(parsers.parse('a {method} request is sent to "{uri_part}"'), target_fixture="api_response")
def send_request(api_executor, api_manager, method, uri_part):
    url = api_executor.url_with_query(api_manager.build_uri(uri_part))
    return api_executor.execute(method, url)


@then(parsers.parse("the sample endpoint returns {count:d} items"))
def sample_endpoint_returns(sample_result, count):
    assert sample_result is not None, "sample endpoint call failed"
    assert len(sample_result) == count


@then("the sample endpoint call fails")
def sample_endpoint_fails(sample_result, scenario_fixture):
    assert sample_result is None
    assert scenario_fixture.data_bag.get(DataBagKeys.ERROR)


@then(parsers.parse("the response status is {status:d}"))
def response_status(api_response, status):
    assert api_response.status == status
