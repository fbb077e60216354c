from typing import List

from starlette.middleware.cors import CORSMiddleware

from coursereviews.config import config

LOCAL_FRONTEND_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


def allowed_origins() -> List[str]:
    """Local frontends, the deployed frontend and anything in ALLOWED_ORIGINS."""
    extra = [o.strip() for o in config.ALLOWED_ORIGINS.split(",") if o.strip()]
    origins = []
    for origin in LOCAL_FRONTEND_ORIGINS + [config.FRONTEND_URL] + extra:
        if origin not in origins:
            origins.append(origin)
    return origins


def setup_cors(app):
    # Session cookies are sent cross-origin, so credentials must be allowed
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type"],
        max_age=3600,
    )
