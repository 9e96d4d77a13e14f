from typing import Any, ClassVar, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_pascal

from harness.api.auth_headers import AuthHeaders


class SampleApiRequest(BaseModel):
    """
    Request body of the sample endpoint. Serialized with PascalCase keys.

    Only CompanyCode, CropYear, TechnologyList and the six lists below carry a
    value by default. Every other field goes on the wire only once a caller
    sets it; use to_body() to get the payload.
    """

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)

    company_code: str = "00555"
    crop_year: int = 2024
    account_number: Optional[int] = None
    is_availability_checked: Optional[bool] = None
    is_relatedto_dealer_items_only: Optional[bool] = None
    brand: Optional[str] = None
    marketing_brand_list: List[str] = Field(default_factory=list)
    seed_size_list: List[Any] = Field(default_factory=list)
    package_size_list: List[Any] = Field(default_factory=list)
    technology_list: Optional[List[Any]] = None
    treatment_list: List[Any] = Field(default_factory=list)
    product_line_list: List[str] = Field(default_factory=list)
    maturity_min: Optional[float] = None
    maturity_max: Optional[float] = None
    item_no_list: Optional[List[Any]] = None
    screen_name: Optional[str] = None

    DEFAULT_FIELDS: ClassVar[Tuple[str, ...]] = (
        "company_code",
        "crop_year",
        "marketing_brand_list",
        "seed_size_list",
        "package_size_list",
        "technology_list",
        "treatment_list",
        "product_line_list",
    )

    def model_post_init(self, __context):
        self.model_fields_set.update(self.DEFAULT_FIELDS)

    def to_body(self):
        return self.model_dump(by_alias=True, exclude_unset=True)


class SampleApiResponse(BaseModel):
    """Parsed body of the sample endpoint: {"resultData": [...]}."""

    result_data: List[Any] = Field(default_factory=list, alias="resultData")

    @field_validator("result_data", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return [] if value is None else value

    @classmethod
    def from_json(cls, payload: Any) -> "SampleApiResponse":
        # Anything other than a JSON object carries no resultData
        if not isinstance(payload, dict):
            return cls()
        return cls.model_validate(payload)


class RequestOptions(BaseModel):
    """
    Per-call request data passed straight to ApiExecutor.get/post.

    Using options instead of values staged in the DataBag keeps two calls that
    share a bag from overwriting each other's headers or body.

    Example:
        options = RequestOptions().with_header("X-Trace", "abc").with_body({"id": 1})
        executor.post(url, options)
    """

    auth: Optional[AuthHeaders] = None
    headers: List[Dict[str, str]] = Field(default_factory=list)
    query_params: List[Dict[str, str]] = Field(default_factory=list)
    body: Any = None

    def with_auth_token(self, token: str) -> "RequestOptions":
        self.auth = AuthHeaders(token=token)
        return self

    def with_header(self, name: str, value: str) -> "RequestOptions":
        self.headers.append({name: value})
        return self

    def with_query_param(self, name: str, value: str) -> "RequestOptions":
        self.query_params.append({name: value})
        return self

    def with_body(self, body: Any) -> "RequestOptions":
        self.body = body
        return self


class EndpointResult(BaseModel):
    """Outcome of an endpoint call: either data (possibly empty) or an error."""

    ok: bool
    data: Optional[List[Any]] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, data: List[Any]) -> "EndpointResult":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error: str) -> "EndpointResult":
        return cls(ok=False, error=error)
