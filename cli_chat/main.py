"""cli-chat API — FastAPI application factory for the user and chat RPC services.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CliChatError → RPC status codes
    - Database initialized on startup, disposed on shutdown, via lifespan
    - user_app and chat_app deploy the two services separately; app serves both

Design Decisions:
    - One factory, three apps: each service can run as its own process
      (uvicorn cli_chat.main:user_app / cli_chat.main:chat_app)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from cli_chat.api.error_handlers import register_error_handlers
from cli_chat.api.routes import chat_v1, health, reflection, user_v1
from cli_chat.config import get_settings
from cli_chat.infrastructure import database
from cli_chat.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)

RPC_SERVICES = {
    "user": user_v1,
    "chat": chat_v1,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info(f"{app.title} started: {', '.join(app.state.rpc_services)}")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info(f"{app.title} shutting down")


def create_app(*services: str) -> FastAPI:
    """Build an app serving the named RPC services ("user", "chat")."""
    unknown = set(services) - set(RPC_SERVICES)
    if unknown:
        raise ValueError(f"Unknown RPC services: {sorted(unknown)}")

    app = FastAPI(
        title=f"{get_settings().service_name} ({'+'.join(services)})",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.rpc_services = {}
    for name in services:
        module = RPC_SERVICES[name]
        app.include_router(module.router)
        app.state.rpc_services[module.SERVICE_NAME] = module.METHODS

    app.include_router(health.router)
    app.include_router(reflection.router)
    register_error_handlers(app)
    return app


user_app = create_app("user")
chat_app = create_app("chat")
app = create_app("user", "chat")
