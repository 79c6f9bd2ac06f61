"""Storefront FastAPI application.

Web server that processes commands synchronously via HTTP. Every ``/api``
request is wrapped in the storefront domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import os
from uuid import uuid4

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV controls which config overlay is applied:
#   - "test"       → in-memory adapters
#   - "production" → PostgreSQL at DATABASE_URL
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from storefront.domain import logger, storefront
from storefront.utils.logging import add_context, clear_context

storefront.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="Crypto-priced merchandise store: catalogue, carts and orders",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the storefront domain context for API requests."""
    if not request.url.path.startswith("/api"):
        # Health check, docs, etc.
        return await call_next(request)

    clear_context()
    add_context(
        request_id=request.headers.get("x-request-id") or uuid4().hex,
        method=request.method,
        path=request.url.path,
    )
    with storefront.domain_context():
        response = await call_next(request)
    logger.debug("request.completed", status_code=response.status_code)
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from storefront.api import (  # noqa: E402
    cart_router,
    order_router,
    product_router,
    register_error_handlers,
    user_router,
)

app.include_router(product_router)
app.include_router(cart_router)
app.include_router(order_router)
app.include_router(user_router)
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": storefront.name})


if __name__ == "__main__":
    import uvicorn

    port = int(os.environ.get("PORT", "5000"))
    logger.info("server.starting", port=port)
    uvicorn.run(app, host="0.0.0.0", port=port)
