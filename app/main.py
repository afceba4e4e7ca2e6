"""
FastAPI application entry point.
Main application setup and configuration.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
from contextlib import asynccontextmanager
import logging

from app.config import settings
from app.database import check_database_connection, create_auth_client, create_supabase_client
from app.repositories import AdminUserRepository
from app.routers import (
    admin_properties_router,
    admin_reviews_router,
    auth_router,
    contact_router,
    properties_router,
    reviews_router
)
from app.utils.exceptions import APIException, RepositoryError
from app.services.error_handler import ErrorHandlerService
from app.services.notifier import ContactNotifier, SMTPMailer
from app.middleware import RequestLoggingMiddleware

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


async def bootstrap_admin(client, admin_user_id: str) -> None:
    """Promote the configured identity to admin; failures are logged, not raised."""
    try:
        await AdminUserRepository(client).ensure_admin(admin_user_id)
        logger.info(f"Admin flag ensured for {admin_user_id}")
    except RepositoryError as e:
        logger.error(f"Failed to bootstrap admin {admin_user_id}: {e.detail}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Builds the Supabase clients and the mail transport once per process.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    app.state.supabase = await create_supabase_client(settings)
    app.state.auth_client = await create_auth_client(settings)

    mailer = SMTPMailer(
        host=settings.mail_host,
        port=settings.mail_port,
        user=settings.mail_user,
        password=settings.mail_pass,
        sender=settings.sender_address,
        timeout=settings.mail_timeout
    )
    app.state.contact_notifier = ContactNotifier(mailer, settings.operator_inbox)

    if not await check_database_connection(app.state.supabase):
        # Keep serving; individual requests report their own failures
        logger.error("Failed to connect to database on startup")

    if settings.admin_user_id:
        await bootstrap_admin(app.state.supabase, settings.admin_user_id)

    yield

    # Shutdown
    logger.info("Shutting down application")


# Create FastAPI application instance
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Backend for a real-estate listing site.

    ## Features

    * **Properties**: Public listing and admin CRUD, with image upload to object storage
    * **Reviews**: Public listing and admin CRUD, with a single-image upload endpoint
    * **Contact form**: Email notification to the submitter and the operator inbox

    ## Authentication

    Admin endpoints require a Supabase access token. Use `/admin/login` to obtain one,
    then include it in the Authorization header as `Bearer <token>`.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {
            "name": "Authentication",
            "description": "Admin sign-in and access check"
        },
        {
            "name": "Properties",
            "description": "Public property listings"
        },
        {
            "name": "Properties (admin)",
            "description": "Property management and image upload"
        },
        {
            "name": "Reviews",
            "description": "Public customer reviews"
        },
        {
            "name": "Reviews (admin)",
            "description": "Review management and image upload"
        },
        {
            "name": "Contact",
            "description": "Contact form submission"
        },
        {
            "name": "Health",
            "description": "Liveness endpoints"
        }
    ],
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
    expose_headers=["X-Request-ID"],
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)

# Include API routers
app.include_router(auth_router)
app.include_router(properties_router)
app.include_router(admin_properties_router)
app.include_router(reviews_router)
app.include_router(admin_reviews_router)
app.include_router(contact_router)


# Global exception handlers using ErrorHandlerService
@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    """Handle custom API exceptions with structured error responses."""
    return ErrorHandlerService.handle_api_exception(exc, request)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation errors as 400 responses."""
    return ErrorHandlerService.handle_validation_error(exc, request)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle FastAPI HTTP exceptions with structured error responses."""
    return ErrorHandlerService.handle_http_exception(exc, request)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with a generic 500 response."""
    return ErrorHandlerService.handle_unexpected_error(exc, request)


@app.get("/", tags=["Health"], response_class=PlainTextResponse)
async def root():
    return "API is running..."


@app.get("/health", tags=["Health"], response_class=PlainTextResponse)
async def health_check():
    """Liveness probe; does not touch downstream services."""
    return "OK"


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
