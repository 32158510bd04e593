"""Unit tests for main application entry point."""

import os
from unittest.mock import MagicMock, Mock, patch

import pytest
from fastapi import FastAPI

from src.main import create_application, get_dynamodb_resource


@pytest.mark.unit
class TestGetDynamoDBResource:
    """Tests for get_dynamodb_resource function."""

    @patch.dict(os.environ, {"DYNAMODB_ENDPOINT": "", "AWS_REGION": "us-west-2"}, clear=True)
    @patch("src.main.boto3.resource")
    def test_creates_aws_resource_when_no_endpoint(self, mock_boto3_resource: Mock) -> None:
        mock_resource = MagicMock()
        mock_boto3_resource.return_value = mock_resource

        result = get_dynamodb_resource()

        mock_boto3_resource.assert_called_once_with("dynamodb", region_name="us-west-2")
        assert result == mock_resource

    @patch.dict(
        os.environ,
        {
            "DYNAMODB_ENDPOINT": "http://localhost:8000",
            "AWS_REGION": "us-east-1",
            "AWS_ACCESS_KEY_ID": "dummy",
            "AWS_SECRET_ACCESS_KEY": "dummy",
        },
        clear=True,
    )
    @patch("src.main.boto3.resource")
    def test_creates_local_resource_when_endpoint_provided(self, mock_boto3_resource: Mock) -> None:
        get_dynamodb_resource()

        mock_boto3_resource.assert_called_once_with(
            "dynamodb",
            endpoint_url="http://localhost:8000",
            region_name="us-east-1",
            aws_access_key_id="dummy",
            aws_secret_access_key="dummy",
        )

    @patch.dict(os.environ, {"DYNAMODB_ENDPOINT": ""}, clear=True)
    @patch("src.main.boto3.resource")
    def test_uses_default_region_when_not_specified(self, mock_boto3_resource: Mock) -> None:
        get_dynamodb_resource()

        mock_boto3_resource.assert_called_once_with("dynamodb", region_name="us-east-1")


@pytest.mark.unit
class TestCreateApplication:
    """Tests for create_application function."""

    @patch.dict(
        os.environ,
        {
            "ENVIRONMENT": "test",
            "DYNAMODB_CUSTOM_TEMPLATES_TABLE": "my-templates",
            "PRINT_SETTLE_DELAY_MS": "500",
            "PREVIEW_MAX_SESSIONS": "10",
            "PREVIEW_SESSION_TTL_SECONDS": "120",
        },
        clear=True,
    )
    @patch("src.main.setup_observability")
    @patch("src.main.get_dynamodb_resource")
    def test_wires_services_from_environment(
        self, mock_get_resource: Mock, mock_setup_observability: Mock
    ) -> None:
        mock_resource = MagicMock()
        mock_get_resource.return_value = mock_resource

        app = create_application()

        assert isinstance(app, FastAPI)
        mock_resource.Table.assert_called_once_with("my-templates")
        assert app.state.export_service.print_settle_delay_ms == 500
        assert app.state.template_service.repository.table_name == "my-templates"
        assert app.state.preview_service.sessions.maxsize == 10
        assert app.state.preview_service.sessions.ttl == 120
        mock_setup_observability.assert_called_once_with(app)

    @patch.dict(os.environ, {"ENVIRONMENT": "test"}, clear=True)
    @patch("src.main.setup_observability")
    @patch("src.main.get_dynamodb_resource")
    def test_default_configuration(self, mock_get_resource: Mock, _mock_setup: Mock) -> None:
        mock_get_resource.return_value = MagicMock()

        app = create_application()

        assert app.state.export_service.print_settle_delay_ms == 1000
        assert app.state.template_service.repository.table_name == "menu-custom-templates"
        assert app.state.preview_service.sessions.maxsize == 1000
