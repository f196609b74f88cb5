"""AgroStore FastAPI application.

Multi-domain web server that processes commands synchronously via HTTP.
Each request is wrapped in the correct domain context based on URL prefix.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at module level so uvicorn workers share them.
# PROTEAN_ENV selects the config overlay in each domain.toml:
#   - "test"       → in-memory stores
#   - "production" → PostgreSQL at DATABASE_URL
from time import perf_counter
from uuid import uuid4

from catalogue.domain import catalogue  # noqa: E402
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from identity.domain import identity  # noqa: E402
from ordering.domain import ordering  # noqa: E402
from starlette.middleware.sessions import SessionMiddleware

from shared.errors import register_exception_handlers
from shared.logging import add_context, clear_context, get_logger
from shared.settings import get_settings

identity.init()
catalogue.init()
ordering.init()

logger = get_logger(__name__)
settings = get_settings()

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/auth": identity,
    "/users": identity,
    "/products": catalogue,
    "/categories": catalogue,
    "/import-products": catalogue,
    "/cart": ordering,
    "/checkout": ordering,
    "/orders": ordering,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title=settings.project_name,
    description="Agricultural export storefront - catalogue, cart, checkout and orders",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the correct Protean domain context for each request and log it."""
    clear_context()
    add_context(
        request_id=request.headers.get("x-request-id") or uuid4().hex,
        method=request.method,
        path=request.url.path,
    )
    started = perf_counter()

    domain = _resolve_domain(request.url.path)
    if domain is not None:
        with domain.domain_context():
            response = await call_next(request)
    else:
        # No domain match - pass through (health check, docs, uploads)
        response = await call_next(request)

    logger.info(
        "request_completed",
        status_code=response.status_code,
        duration_ms=round((perf_counter() - started) * 1000, 2),
    )
    clear_context()
    return response


# Added last so it wraps everything above and the session is ready for handlers
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    session_cookie=settings.session_cookie_name,
    same_site="lax",
    https_only=settings.cookie_secure,
)

register_exception_handlers(app)

app.mount("/uploads", StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from catalogue.api import category_router, import_router, product_router  # noqa: E402
from identity.api import auth_router, user_router  # noqa: E402
from ordering.api.routes import cart_router, checkout_router, order_router  # noqa: E402

app.include_router(auth_router)
app.include_router(user_router)
app.include_router(category_router)
app.include_router(product_router)
app.include_router(import_router)
app.include_router(cart_router)
app.include_router(checkout_router)
app.include_router(order_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "identity": {"name": identity.name},
                "catalogue": {"name": catalogue.name},
                "ordering": {"name": ordering.name},
            },
        }
    )
