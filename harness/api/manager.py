"""
High-level API manager with one method per known endpoint.

Builds endpoint URLs from API_BASEURL and API_URI_PREFIX, stores the request
body in the scenario DataBag, delegates the call to ApiExecutor and parses the
response into a typed model.
"""

import config
from harness.api.models import EndpointResult, SampleApiResponse
from harness.data_bag import DataBagKeys


class ApiManager:
    SAMPLE_API_URI = "sample/api"

    def __init__(self, executor):
        self.executor = executor
        self.data_bag = executor.data_bag
        self.logger = executor.logger

    @staticmethod
    def build_uri(uri_part):
        """
        Join base URL, URI prefix and uri_part with single slashes.

        Unset configuration gives a malformed URL rather than an error.

        Example:
            API_BASEURL=https://qa1.example.com, API_URI_PREFIX=services/v1
            build_uri("sample/api") -> "https://qa1.example.com/services/v1/sample/api"
        """
        uri = config.api_base_url() or ""
        if not uri.endswith("/"):
            uri += "/"

        uri += config.api_uri_prefix() or ""
        if not uri.endswith("/"):
            uri += "/"

        return uri + uri_part

    def call_sample_endpoint_result(self, request):
        """
        POST request to the sample endpoint.

        Args:
            request: SampleApiRequest (or any JSON-serializable body)

        Returns:
            EndpointResult with the resultData list, or the failure message
        """
        url = self.build_uri(self.SAMPLE_API_URI)
        self.data_bag.save(DataBagKeys.REQUEST_BODY, request)

        try:
            response = self.executor.post(url)
            parsed = SampleApiResponse.from_json(response.json())
            return EndpointResult.success(parsed.result_data)
        except Exception as e:
            self.logger.error(f"Failed to call the endpoint. Error: {e}")
            self.data_bag.save(DataBagKeys.ERROR, str(e))
            return EndpointResult.failure(str(e))

    def call_sample_endpoint(self, request):
        """
        POST request to the sample endpoint and return its resultData.

        Returns:
            List of result items ([] when the body has no resultData), or None
            when the call or the parsing failed. The failure is logged, not raised.
        """
        result = self.call_sample_endpoint_result(request)
        if not result.ok:
            return None
        return result.data
