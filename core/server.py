"""
FastAPI Application Factory.

Creates the FastAPI application with middleware, health check and the
system endpoints (status, event log, modules, event dispatch).
"""

from typing import Annotated, Any, TYPE_CHECKING
from datetime import datetime, timezone
import logging
import time

from fastapi import APIRouter, Body, FastAPI, HTTPException, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from core.app_context import AppContext

if TYPE_CHECKING:
    from core.registry import ModuleRegistry

_logger = logging.getLogger(__name__)

# Module-level start time for uptime calculation
_start_time: float = time.time()


# -----------------------------------------------------------------------------
# Schemas
# -----------------------------------------------------------------------------


class ServerStatus(BaseModel):
    running: bool
    port: int
    host: str
    uptime_seconds: float
    started_at: str


class SystemStatusResponse(BaseModel):
    server: ServerStatus
    version: str
    environment: str


class LogEntry(BaseModel):
    message: str
    timestamp: str | None = None


class LogsResponse(BaseModel):
    logs: list[LogEntry]
    total: int


class ModuleInfo(BaseModel):
    name: str
    status: str
    has_api_router: bool
    details: dict[str, Any] = {}


class ModulesResponse(BaseModel):
    modules: list[ModuleInfo]
    total: int


# -----------------------------------------------------------------------------
# Factory
# -----------------------------------------------------------------------------


def create_base_app(
    context: AppContext,
    registry: "ModuleRegistry | None" = None,
    title: str = "Admin Roster API",
    description: str = "Admin directory management for the society dashboard",
    version: str = "1.0.0",
) -> FastAPI:
    """
    Create and configure the base FastAPI application.

    Args:
        context: Application context for logging and configuration.
        registry: Module registry used by the system endpoints.
        title: API title for OpenAPI documentation.
        description: API description for OpenAPI documentation.
        version: API version string.
    """
    app = FastAPI(title=title, description=description, version=version)

    # Store references in app state for access in route handlers
    app.state.context = context
    app.state.registry = registry

    config = context.config
    base_url = config.get("server.base_url", "")
    is_debug = config.get("app.debug", False)

    allowed_origins: list[str] = [base_url] if base_url else []
    if is_debug:
        allowed_origins.extend([
            "http://localhost:8000",
            "http://127.0.0.1:8000",
        ])

    if not allowed_origins:
        _logger.warning("CORS configured with no allowed origins (set BASE_URL)")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": title}

    app.include_router(system_router, prefix="/api")
    return app


def set_registry(app: FastAPI, registry: "ModuleRegistry") -> None:
    """Set the module registry used by the system endpoints."""
    app.state.registry = registry


def _get_registry(request: Request) -> "ModuleRegistry":
    registry = request.app.state.registry
    if registry is None:
        _logger.error("ModuleRegistry not configured")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server configuration error",
        )
    return registry


# -----------------------------------------------------------------------------
# System Routes
# -----------------------------------------------------------------------------

system_router = APIRouter(tags=["System"])


@system_router.get("/system/status", response_model=SystemStatusResponse)
async def get_system_status(request: Request) -> SystemStatusResponse:
    context: AppContext = request.app.state.context
    running, port = context.get_server_status()

    return SystemStatusResponse(
        server=ServerStatus(
            running=running,
            port=port,
            host=context.config.get("server.host", "127.0.0.1"),
            uptime_seconds=time.time() - _start_time,
            started_at=datetime.fromtimestamp(_start_time, tz=timezone.utc).isoformat(),
        ),
        version=request.app.version,
        environment="development" if context.config.get("app.debug", True) else "production",
    )


@system_router.get("/system/logs", response_model=LogsResponse)
async def get_system_logs(
    request: Request,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> LogsResponse:
    """Recent event log entries, newest first."""
    context: AppContext = request.app.state.context
    all_logs = context.get_event_log()
    paginated = list(reversed(all_logs))[offset : offset + limit]

    entries = []
    for log_line in paginated:
        # Format: [HH:MM:SS] [LEVEL] message
        timestamp = None
        message = log_line
        if log_line.startswith("[") and "]" in log_line:
            ts_end = log_line.index("]", 1)
            timestamp = log_line[1:ts_end]
            message = log_line[ts_end + 1 :].strip()
        entries.append(LogEntry(message=message, timestamp=timestamp))

    return LogsResponse(logs=entries, total=len(all_logs))


@system_router.get("/system/modules", response_model=ModulesResponse)
async def get_loaded_modules(request: Request) -> ModulesResponse:
    registry = _get_registry(request)
    statuses = registry.get_statuses()

    modules_info = [
        ModuleInfo(
            name=module.get_module_name(),
            status=statuses[module.get_module_name()].get("status", "active"),
            has_api_router=module.get_api_router() is not None,
            details=statuses[module.get_module_name()].get("details", {}),
        )
        for module in registry.get_all_modules()
    ]
    return ModulesResponse(modules=modules_info, total=len(modules_info))


@system_router.post("/modules/{module_name}/events")
async def dispatch_event(
    module_name: str,
    request: Request,
    event: Annotated[dict[str, Any], Body()],
) -> dict[str, Any]:
    """Route an action event to a module's ``handle_event``."""
    registry = _get_registry(request)
    if registry.get_module(module_name) is None:
        _logger.warning(f"Event for unknown module '{module_name}'")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Module '{module_name}' not found",
        )

    response = registry.dispatch(module_name, event)
    return response or {"status": "ok"}
