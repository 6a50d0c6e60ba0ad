"""
Admin Roster - Entry Point.

Headless ASGI application for uvicorn execution.

Usage:
    uvicorn main:app --host 0.0.0.0 --port 8000 --reload

Or run directly:
    python main.py
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI

from core.app_context import AppContext
from core.logging_config import setup_logging
from core.registry import ModuleLoader, ModuleRegistry
from core.server import create_base_app, set_registry

# Module directory path
MODULES_DIR = "modules"


# -----------------------------------------------------------------------------
# Application Factory
# -----------------------------------------------------------------------------


def create_app_context() -> AppContext:
    """Create and configure the AppContext."""
    return AppContext()


def create_registry(context: AppContext) -> ModuleRegistry:
    """Create the ModuleRegistry and load every module under modules/."""
    registry = ModuleRegistry()
    registry.set_context(context)

    modules_path = Path(__file__).parent / MODULES_DIR
    loader = ModuleLoader(registry)
    count = loader.load_from_directory(str(modules_path))
    context.log_event(f"Loaded {count} module(s) from {MODULES_DIR}/", "LOADER")

    return registry


def create_fastapi_app(context: AppContext, registry: ModuleRegistry) -> FastAPI:
    """Create the FastAPI application with module routers mounted under /api."""
    app = create_base_app(context, registry)
    set_registry(app, registry)

    for module in registry.get_all_modules():
        module_router = module.get_api_router()
        if module_router is not None:
            app.include_router(module_router, prefix="/api")
            context.log_event(
                f"Registered API router for module: {module.get_module_name()} at /api",
                "LOADER",
            )

    app.router.lifespan_context = lifespan
    return app


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Marks the server as running on startup and shuts modules down on exit.
    """
    logger = logging.getLogger(__name__)
    context: AppContext = app.state.context
    registry: ModuleRegistry | None = app.state.registry

    logger.info("Starting Admin Roster...")
    context.set_server_status(True, context.config.get("server.port", 8000))
    context.log_event("Application started successfully", "SUCCESS")

    yield

    logger.info("Shutting down Admin Roster...")
    if registry:
        registry.shutdown_all()
    context.set_server_status(False, context.config.get("server.port", 8000))
    logger.info("Cleanup complete")


def build_app() -> FastAPI:
    """Set up logging, load modules and return the ASGI app."""
    context = create_app_context()
    setup_logging(context.config.get_log_level())
    registry = create_registry(context)
    return create_fastapi_app(context, registry)


# -----------------------------------------------------------------------------
# Module-level Application Instance
# -----------------------------------------------------------------------------

# Export for uvicorn
app = build_app()


# -----------------------------------------------------------------------------
# Direct Execution
# -----------------------------------------------------------------------------


def main() -> None:
    """Run the application directly with uvicorn."""
    context: AppContext = app.state.context
    host = context.config.get("server.host", "127.0.0.1")
    port = context.config.get("server.port", 8000)
    debug = context.config.get("app.debug", False)

    uvicorn_config = {
        "host": host,
        "port": port,
        "reload": debug,
        "log_level": "warning",
        "access_log": False,
    }

    if debug:
        uvicorn_config["reload_excludes"] = [
            "logs/*",
            "**/__pycache__/*",
            "**/*.pyc",
            ".venv/*",
            "*.log",
        ]

    uvicorn.run("main:app", **uvicorn_config)


if __name__ == "__main__":
    main()
