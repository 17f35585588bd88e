
import logging
import sys
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.middleware.ratelimit import RateLimitMiddleware, client_key
from app.config import settings
from app.db.session import init_db
from app.errors import install_error_handlers
from app.auth.routes import router as auth_router
from app.users.routes import router as users_router
from app.stores.routes import router as stores_router
from app.ratings.routes import router as ratings_router
from app.stats.routes import router as stats_router

def configure_logging():
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.app_name)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(
        RateLimitMiddleware,
        window_seconds=settings.rate_limit_window_seconds,
        max_calls=settings.rate_limit_max_calls,
        key_func=client_key,
    )

    install_error_handlers(app)

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(stores_router)
    app.include_router(ratings_router)
    app.include_router(stats_router)

    @app.on_event("startup")
    def on_startup():
        init_db()

    @app.get("/", tags=["root"])
    def root():
        return {"name": settings.app_name, "env": settings.app_env}

    return app

app = create_app()
