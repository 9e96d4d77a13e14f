"""
Authorization data sent with every API call.

Steps store an AuthHeaders instance in the scenario DataBag under
DataBagKeys.AUTH_HEADERS; ApiExecutor turns it into request headers.

Example:
    data_bag.save(DataBagKeys.AUTH_HEADERS, AuthHeaders(token="Bearer eyJhbGci..."))
"""

from typing import Dict, Optional

from pydantic import BaseModel

TOKEN_HEADER = "Token"


class AuthHeaders(BaseModel):
    token: Optional[str] = None

    def to_headers(self) -> Dict[str, str]:
        """Header form of the credential; an unset token yields no header."""
        if self.token is None:
            return {}
        return {TOKEN_HEADER: self.token}
