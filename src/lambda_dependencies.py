"""Cached dependency factory for the Lambda handler.

Dependencies are created once per Lambda container and reused across warm
invocations.
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

_dynamodb_resource: Any | None = None
_template_service: TemplateService | None = None
_export_service: ExportService | None = None
_fastapi_app: FastAPI | None = None


def get_dynamodb_resource() -> Any:
    """Create or retrieve cached DynamoDB resource."""
    global _dynamodb_resource

    if _dynamodb_resource is not None:
        return _dynamodb_resource

    endpoint_url = os.getenv("DYNAMODB_ENDPOINT")
    region = os.getenv("AWS_REGION", "us-east-1")

    if endpoint_url:
        logger.info(f"Using local DynamoDB at {endpoint_url}")
        _dynamodb_resource = boto3.resource(
            "dynamodb",
            endpoint_url=endpoint_url,
            region_name=region,
            aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID"),
            aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY"),
        )
    else:
        logger.info(f"Using AWS DynamoDB in region {region}")
        _dynamodb_resource = boto3.resource("dynamodb", region_name=region)

    return _dynamodb_resource


def get_template_service() -> TemplateService:
    """Create or retrieve cached template service."""
    global _template_service

    if _template_service is not None:
        return _template_service

    table_name = os.getenv("DYNAMODB_CUSTOM_TEMPLATES_TABLE", "menu-custom-templates")
    repository = CustomTemplateRepository(
        dynamodb_resource=get_dynamodb_resource(), table_name=table_name
    )
    _template_service = TemplateService(repository=repository)

    logger.info("Template service initialized")
    return _template_service


def get_export_service() -> ExportService:
    """Create or retrieve cached export service."""
    global _export_service

    if _export_service is not None:
        return _export_service

    _export_service = ExportService(
        print_settle_delay_ms=int(os.getenv("PRINT_SETTLE_DELAY_MS", "1000"))
    )

    logger.info("Export service initialized")
    return _export_service


def get_fastapi_app() -> FastAPI:
    """Create or retrieve cached FastAPI application.

    Preview sessions live in the container's memory, so a session is only
    reachable from invocations served by the same container.
    """
    global _fastapi_app

    if _fastapi_app is not None:
        return _fastapi_app

    _fastapi_app = create_app(
        export_service=get_export_service(),
        template_service=get_template_service(),
        preview_service=PreviewSessionStore(
            max_sessions=int(os.getenv("PREVIEW_MAX_SESSIONS", str(DEFAULT_MAX_SESSIONS))),
            idle_ttl_seconds=float(
                os.getenv("PREVIEW_SESSION_TTL_SECONDS", str(DEFAULT_SESSION_TTL_SECONDS))
            ),
        ),
    )
    setup_observability(_fastapi_app)

    logger.info("FastAPI application initialized")
    return _fastapi_app


def initialize_lambda_environment() -> None:
    """Configure logging; call once during cold start."""
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    logger.info("Lambda environment initialized")
