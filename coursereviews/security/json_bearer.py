from typing import Optional

from fastapi import Request
from fastapi.openapi.models import HTTPBearer as HTTPBearerModel
from fastapi.security.base import SecurityBase
from fastapi.security.utils import get_authorization_scheme_param

from coursereviews.exceptions import NotAuthenticated

ACCESS_TOKEN_COOKIE = "access_token"


class SessionTokenBearer(SecurityBase):
    """Reads the session token from the Authorization header or, failing
    that, from the access_token cookie set by the sign-in callback."""

    def __init__(
        self,
        scheme_name: Optional[str] = None,
        description: Optional[str] = None,
        auto_error: bool = True,
    ):
        self.scheme_name = scheme_name or self.__class__.__name__
        self.auto_error = auto_error
        self.model = HTTPBearerModel(bearerFormat="JWT", description=description)
        self.description = description

    async def __call__(self, request: Request) -> Optional[str]:
        authorization = request.headers.get("Authorization")
        scheme, param = get_authorization_scheme_param(authorization)
        if authorization and scheme.lower() == "bearer" and param:
            return param

        cookie_token = request.cookies.get(ACCESS_TOKEN_COOKIE)
        if cookie_token:
            return cookie_token

        if self.auto_error:
            raise NotAuthenticated()
        return None
