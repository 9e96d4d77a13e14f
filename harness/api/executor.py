"""
Low-level API executor: GET and POST calls with auth and additional headers.

HTTP methods are kept in a registry, the same way browser actions are, so a step
can dispatch on a method name taken from a feature file. Every call:
- reads auth headers from the DataBag (or the RequestOptions passed in)
- merges additional header records over them, later keys winning
- issues exactly one request with a 150 second timeout
- returns the raw Playwright APIResponse without interpreting it

Nothing is retried. Transport errors and timeouts propagate to the caller and
non-2xx responses are returned like any other response.

Example:
    executor.save_additional_headers([{"X-Client": "qa"}])
    data_bag.save(DataBagKeys.REQUEST_BODY, {"name": "John"})
    response = executor.post("https://api.example.com/users")
    assert response.status == 200
"""

import logging
from collections.abc import Mapping

from pydantic import BaseModel

import config
from harness.api.auth_headers import AuthHeaders
from harness.data_bag import DataBagKeys


def build_query_string(records):
    """
    Flatten query parameter records into "k=v&k=v".

    Keys and values are used as-is; no URL-encoding is applied.

    Args:
        records: Sequence of dicts, e.g. [{"page": "1", "limit": "10"}]

    Returns:
        Query string without a leading "?" ("" for no records)
    """
    query = ""
    for row in records:
        for key, value in row.items():
            query += f"{key}={value}&"
    return query[:-1]


def _auth_as_headers(auth):
    if auth is None:
        return {}
    if isinstance(auth, AuthHeaders):
        return auth.to_headers()
    if isinstance(auth, Mapping):
        return dict(auth)
    raise TypeError(f"Unsupported auth headers value: {auth!r}")


def _serialize_body(body):
    if isinstance(body, BaseModel):
        if hasattr(body, "to_body"):
            return body.to_body()
        return body.model_dump(by_alias=True)
    return body


class ApiExecutor:
    """
    Issues single GET/POST requests through an injected request context.

    Values staged in the DataBag (auth headers, additional headers, request
    body) are shared by every call on the same bag, so only one call should be
    in flight per bag. Pass RequestOptions to get/post to avoid the staging.
    """

    TIME_OUT = config.API_TIMEOUT_MS

    def __init__(self, data_bag, request_context, logger=None):
        """
        Args:
            data_bag: Scenario DataBag holding staged headers and body
            request_context: Playwright APIRequestContext (or anything with get/post)
            logger: Logger for call tracing. Defaults to this module's logger
        """
        self.data_bag = data_bag
        self.request_context = request_context
        self.logger = logger or logging.getLogger(__name__)
        self.method_handlers = {}
        self._register_default_methods()

    def _register_default_methods(self):
        self.register_method("get", self.get)
        self.register_method("post", self.post)

    def register_method(self, method_name, handler):
        """
        Register a handler for an HTTP method.

        Args:
            method_name: Method name, case-insensitive (e.g. "put")
            handler: Callable taking (url, options) and returning a response
        """
        self.method_handlers[method_name.lower()] = handler

    def execute(self, method, url, options=None):
        """Dispatch to the handler registered for method."""
        handler = self.method_handlers.get(method.lower())
        if not handler:
            raise ValueError(f"Unsupported HTTP method '{method}'")
        return handler(url, options)

    def save_query_params(self, records):
        self.data_bag.save(DataBagKeys.QUERY_PARAMETERS, build_query_string(records))

    def save_additional_headers(self, records):
        self.data_bag.save(DataBagKeys.ADDITIONAL_HEADERS, records)

    def query_string(self):
        return self.data_bag.get(DataBagKeys.QUERY_PARAMETERS) or ""

    def url_with_query(self, url, query=None):
        """
        Append a query string to url.

        Args:
            url: Target URL, possibly with a query already
            query: Query string to append. Defaults to the staged query parameters

        Returns:
            url unchanged when the query is empty
        """
        if query is None:
            query = self.query_string()
        if not query:
            return url
        separator = "&" if "?" in url else "?"
        return f"{url}{separator}{query}"

    def get_headers_data(self, options=None):
        """
        Merge auth headers with additional header records.

        Later records overwrite earlier keys, including the auth Token header.

        Args:
            options: RequestOptions. When given its headers replace the staged
                     additional headers; its auth, if set, replaces the staged auth

        Returns:
            New dict of request headers
        """
        auth = None
        if options is not None:
            auth = options.auth
        if auth is None:
            auth = self.data_bag.get(DataBagKeys.AUTH_HEADERS)
        headers = _auth_as_headers(auth)

        if options is not None:
            additional_headers = options.headers
        else:
            additional_headers = self.data_bag.get(DataBagKeys.ADDITIONAL_HEADERS)

        for row in additional_headers or []:
            for key, value in row.items():
                headers[key] = value
        return headers

    def get(self, url, options=None):
        if options is not None:
            url = self.url_with_query(url, build_query_string(options.query_params))
        self.logger.info(f"about to call {url}")

        headers = self.get_headers_data(options)
        return self.request_context.get(url, headers=headers, timeout=self.TIME_OUT)

    def post(self, url, options=None):
        if options is not None:
            url = self.url_with_query(url, build_query_string(options.query_params))
        self.logger.info(f"about to call {url}")

        headers = self.get_headers_data(options)
        if options is not None:
            body = options.body
        else:
            # No staged body is not an error: the request goes out without one
            body = self.data_bag.get(DataBagKeys.REQUEST_BODY)
        return self.request_context.post(
            url,
            headers=headers,
            data=_serialize_body(body),
            timeout=self.TIME_OUT,
        )
