"""
Key/value storage for passing data between test steps.

Each scenario gets its own DataBag; a second, session-wide bag is shared by all
scenarios. Steps write values under DataBagKeys names and later steps read them.
"""


class DataBagKeys:
    """Well-known keys used by hooks, steps and the API layer."""

    FAILED_STEP = "failedStep"
    ERROR = "error"
    QUERY_PARAMETERS = "queryParams"
    AUTH_HEADERS = "authHeaders"
    ADDITIONAL_HEADERS = "additionalHeaders"
    REQUEST_BODY = "requestBody"
    SCENARIO_NAME = "scenarioName"
    PICKLE_NAME = "pickleName"
    LAST_SCENARIO_EXECUTION_COMPLETED = "lastScenarioExecutionCompleted"


class DataBag:
    """
    Mutable mapping from string keys to arbitrary values.

    There is no eviction and no locking: a bag belongs to one scenario and is
    discarded with it.
    """

    def __init__(self):
        self._data = {}

    def save(self, key, value):
        """Store value under key, replacing any previous value."""
        self._data[key] = value

    def get(self, key, default=None):
        """Return the value stored under key, or default when the key is unset."""
        return self._data.get(key, default)

    def clear(self):
        self._data.clear()

    def __contains__(self, key):
        return key in self._data

    def __repr__(self):
        return f"DataBag(keys={sorted(self._data)})"
