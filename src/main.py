"""Main application entry point for the menu render service.

Builds the FastAPI application from environment configuration for local
runs and container deployments.
"""

import logging
import os
from typing import Any

import boto3
from fastapi import FastAPI

from menu_render_service.handlers.api_handler import create_app
from menu_render_service.observability import configure_logging, setup_observability
from menu_render_service.repositories.template_repository import CustomTemplateRepository
from menu_render_service.services.export_service import ExportService
from menu_render_service.services.preview_service import (
    DEFAULT_MAX_SESSIONS,
    DEFAULT_SESSION_TTL_SECONDS,
    PreviewSessionStore,
)
from menu_render_service.services.template_service import TemplateService

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES_TABLE = "menu-custom-templates"


def get_dynamodb_resource() -> Any:
    """Create DynamoDB resource with appropriate configuration.

    Returns:
        Boto3 DynamoDB resource configured for environment
    """
    # Local DynamoDB endpoint for development
    endpoint_url = os.getenv("DYNAMODB_ENDPOINT")
    region = os.getenv("AWS_REGION", "us-east-1")

    if endpoint_url:
        # Local DynamoDB - credentials come from the environment
        logger.info(f"Using local DynamoDB at {endpoint_url}")
        return boto3.resource(
            "dynamodb",
            endpoint_url=endpoint_url,
            region_name=region,
            aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID"),
            aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY"),
        )

    # Production - default credential chain (IAM role, env vars, etc.)
    logger.info(f"Using AWS DynamoDB in region {region}")
    return boto3.resource("dynamodb", region_name=region)


def create_application() -> FastAPI:
    """Create the FastAPI application with all dependencies.

    This factory function:
    1. Configures logging
    2. Creates the custom template repository
    3. Creates the export, template and preview services
    4. Creates the FastAPI app
    5. Sets up observability

    Returns:
        Configured FastAPI application instance
    """
    # Configure structured logging
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    logger.info("Initializing menu render service...")

    # Custom templates live in DynamoDB; built-ins ship with the code
    templates_table = os.getenv("DYNAMODB_CUSTOM_TEMPLATES_TABLE", DEFAULT_TEMPLATES_TABLE)
    repository = CustomTemplateRepository(
        dynamodb_resource=get_dynamodb_resource(), table_name=templates_table
    )
    logger.info(f"Custom template repository configured - table: {templates_table}")

    # Create services
    settle_delay_ms = int(os.getenv("PRINT_SETTLE_DELAY_MS", "1000"))
    preview_service = PreviewSessionStore(
        max_sessions=int(os.getenv("PREVIEW_MAX_SESSIONS", str(DEFAULT_MAX_SESSIONS))),
        idle_ttl_seconds=float(
            os.getenv("PREVIEW_SESSION_TTL_SECONDS", str(DEFAULT_SESSION_TTL_SECONDS))
        ),
    )

    logger.info("Services initialized")

    # Create FastAPI application
    app = create_app(
        export_service=ExportService(print_settle_delay_ms=settle_delay_ms),
        template_service=TemplateService(repository=repository),
        preview_service=preview_service,
    )

    # Tracing, metrics and FastAPI instrumentation
    setup_observability(app)

    logger.info("Menu render service initialized successfully")
    return app


# Create the FastAPI application instance (only when not in test mode)
# This keeps test collection from touching DynamoDB
if os.getenv("ENVIRONMENT") != "test":  # noqa: SIM108
    app = create_application()
else:
    # Placeholder app for test imports
    app = FastAPI()


if __name__ == "__main__":
    """Run the application with uvicorn when executed directly."""
    import uvicorn

    port = int(os.getenv("PORT", "8001"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info(f"Starting development server on {host}:{port}")
    logger.info(f"API documentation available at http://{host}:{port}/docs")

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
