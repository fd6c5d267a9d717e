# servicedesk/main.py
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from servicedesk.asset.routes import router as asset_router
from servicedesk.auth.routes import router as auth_router
from servicedesk.core.config import get_settings
from servicedesk.core.database import init_db
from servicedesk.core.errors import register_exception_handlers
from servicedesk.core.logging_config import RequestLoggingMiddleware, setup_logging
from servicedesk.core.rate_limit import limiter, rate_limit_exceeded_handler
from servicedesk.dashboard.routes import router as dashboard_router
from servicedesk.license.routes import router as license_router
from servicedesk.locale.middleware import LocaleMiddleware
from servicedesk.locale.routes import router as locale_router
from servicedesk.search.routes import router as search_router
from servicedesk.ticket.routes import router as ticket_router
from servicedesk.user.routes import router as user_router

setup_logging()
init_db()

settings = get_settings()
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESC,
    version=settings.APP_VERSION,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
register_exception_handlers(app)

# Middleware, last added runs first
app.add_middleware(LocaleMiddleware)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(auth_router)
app.include_router(user_router)
app.include_router(ticket_router)
app.include_router(asset_router)
app.include_router(license_router)
app.include_router(search_router)
app.include_router(dashboard_router)
app.include_router(locale_router)


@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}


def run():
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
