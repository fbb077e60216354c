from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

LANDING_PATH = "/"


class NotAuthenticated(HTTPException):
    """No usable session: the client should go back to the landing screen."""

    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


async def not_authenticated_handler(request: Request, exc: NotAuthenticated):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "redirect_to": LANDING_PATH},
        headers=exc.headers,
    )
