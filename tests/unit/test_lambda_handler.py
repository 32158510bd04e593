"""Unit tests for AWS Lambda handler."""

from unittest.mock import MagicMock, Mock, patch

import pytest

from src.lambda_handler import lambda_handler


@pytest.mark.unit
class TestLambdaHandler:
    """Tests for lambda_handler function."""

    @patch("src.lambda_handler.mangum_handler")
    def test_routes_api_gateway_events_to_mangum(self, mock_mangum_handler: Mock) -> None:
        mock_mangum_handler.return_value = {"statusCode": 200, "body": '{"status": "healthy"}'}
        event = {
            "version": "2.0",
            "requestContext": {
                "http": {"method": "GET", "path": "/health"},
                "requestId": "request-id",
            },
            "rawPath": "/health",
        }
        context = MagicMock()
        context.aws_request_id = "test-request-id"

        result = lambda_handler(event, context)

        assert result["statusCode"] == 200
        mock_mangum_handler.assert_called_once_with(event, context)

    @patch("src.lambda_handler.mangum_handler")
    def test_handles_unhandled_exceptions(self, mock_mangum_handler: Mock) -> None:
        mock_mangum_handler.side_effect = RuntimeError("Unexpected error")

        result = lambda_handler({"rawPath": "/health"}, MagicMock())

        assert result["statusCode"] == 500
        assert result["body"] == "Internal server error"
