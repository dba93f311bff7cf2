"""
FastAPI main application entrypoint for the PlanVision API.
"""
import os
import time
import logging
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from planvision.api import (
    routes_auth,
    routes_health,
    routes_image_types,
    routes_input_images,
    routes_project_templates,
    routes_projects,
    routes_render_configs,
    routes_styles,
    routes_users,
)
from planvision.services.auth import AuthMiddleware, SessionResolver, SupabaseAuthProvider, SupabaseSessionResolver
from planvision.services.repository import RepositoryFactory
from planvision.services.storage import StorageService
from planvision.services.supabase_client import SupabaseRepositoryFactory

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
http_logger = logging.getLogger("planvision.http")

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:8080",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
    "http://127.0.0.1:8080",
]


def _cors_origins():
    configured = os.getenv("CORS_ORIGINS")
    if configured:
        return [o.strip() for o in configured.split(",") if o.strip()]
    return DEFAULT_CORS_ORIGINS


async def log_requests(request: Request, call_next):
    """Log each request on arrival and completion."""
    user_agent = request.headers.get("user-agent", "")
    start = time.time()
    http_logger.info(f"Incoming Request: {request.method} {request.url.path} - {user_agent}")
    response = await call_next(request)
    duration_ms = int((time.time() - start) * 1000)
    http_logger.info(
        f"Completed: {request.method} {request.url.path} {response.status_code} - {user_agent} {duration_ms}ms"
    )
    return response


def create_app(
    repositories: Optional[RepositoryFactory] = None,
    session_resolver: Optional[SessionResolver] = None,
    storage: Optional[StorageService] = None,
    auth_provider: Optional[SupabaseAuthProvider] = None,
) -> FastAPI:
    """
    Build the application.

    Collaborators default to the Supabase and Cloud Storage implementations;
    the storage service is created on first use so the API can start without
    bucket configuration.
    """
    app = FastAPI(
        title="PlanVision API",
        description="Backend service for floor-plan and room render projects",
        version="1.0.0",
    )

    app.state.repositories = repositories or SupabaseRepositoryFactory()
    app.state.storage = storage
    app.state.auth_provider = auth_provider or SupabaseAuthProvider()

    app.add_middleware(AuthMiddleware, resolver=session_resolver or SupabaseSessionResolver())
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.middleware("http")(log_requests)

    # Register routes
    app.include_router(routes_health.router, tags=["health"])
    app.include_router(routes_auth.router, tags=["auth"])
    app.include_router(routes_users.router, tags=["users"])
    app.include_router(routes_image_types.router, tags=["image-types"])
    app.include_router(routes_styles.router, tags=["styles"])
    app.include_router(routes_projects.router, tags=["projects"])
    app.include_router(routes_input_images.router, tags=["input-images"])
    app.include_router(routes_render_configs.router, tags=["render-configs"])
    app.include_router(routes_project_templates.router, tags=["project-templates"])

    @app.on_event("startup")
    async def startup_event():
        """Log configuration on startup."""
        logger.info("🚀 PlanVision API starting up...")
        logger.info(f"📍 Environment: {os.getenv('ENVIRONMENT', 'development')}")
        for name in ("SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY", "GCS_BUCKET", "GCP_PROJECT_ID"):
            if not os.getenv(name):
                logger.warning(f"⚠️  WARNING: {name} not found in environment!")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("👋 PlanVision API shutting down...")

    return app


app = create_app()
