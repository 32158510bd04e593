"""Unit tests for the custom template repository."""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from menu_render_service.models.menu_models import MenuStyle, MenuTemplate, TemplateFamily
from menu_render_service.repositories.template_repository import CustomTemplateRepository


def _client_error(operation: str) -> ClientError:
    return ClientError({"Error": {"Code": "InternalServerError", "Message": "Server error"}}, operation)


@pytest.fixture
def custom_template() -> MenuTemplate:
    return MenuTemplate(
        id="custom-abc123",
        name="House Style",
        layout=TemplateFamily.CUSTOM,
        style=MenuStyle(primary_color="#000000"),
        is_custom=True,
    )


@pytest.mark.unit
class TestCustomTemplateRepository:
    """Test suite for CustomTemplateRepository."""

    @pytest.fixture
    def mock_dynamodb(self) -> MagicMock:
        """Create a mock DynamoDB resource."""
        return MagicMock()

    @pytest.fixture
    def repository(self, mock_dynamodb: MagicMock) -> CustomTemplateRepository:
        return CustomTemplateRepository(dynamodb_resource=mock_dynamodb, table_name="test-templates")

    def test_repository_initialization(self, mock_dynamodb: MagicMock) -> None:
        repo = CustomTemplateRepository(dynamodb_resource=mock_dynamodb, table_name="test-table")

        assert repo.table_name == "test-table"
        mock_dynamodb.Table.assert_called_once_with("test-table")

    def test_get_template_success(
        self,
        repository: CustomTemplateRepository,
        mock_dynamodb: MagicMock,
        custom_template: MenuTemplate,
    ) -> None:
        mock_dynamodb.Table.return_value.get_item.return_value = {
            "Item": custom_template.to_dynamodb_item()
        }

        template = repository.get_template("custom-abc123")

        assert template == custom_template
        mock_dynamodb.Table.return_value.get_item.assert_called_once_with(
            Key={"template_id": "custom-abc123"}
        )

    def test_get_template_not_found(
        self, repository: CustomTemplateRepository, mock_dynamodb: MagicMock
    ) -> None:
        mock_dynamodb.Table.return_value.get_item.return_value = {}

        assert repository.get_template("missing") is None

    def test_get_template_dynamodb_error(
        self, repository: CustomTemplateRepository, mock_dynamodb: MagicMock
    ) -> None:
        mock_dynamodb.Table.return_value.get_item.side_effect = _client_error("GetItem")

        assert repository.get_template("custom-abc123") is None

    def test_save_template(
        self,
        repository: CustomTemplateRepository,
        mock_dynamodb: MagicMock,
        custom_template: MenuTemplate,
    ) -> None:
        assert repository.save_template(custom_template) is True

        mock_dynamodb.Table.return_value.put_item.assert_called_once_with(
            Item=custom_template.to_dynamodb_item()
        )

    def test_save_template_dynamodb_error(
        self,
        repository: CustomTemplateRepository,
        mock_dynamodb: MagicMock,
        custom_template: MenuTemplate,
    ) -> None:
        mock_dynamodb.Table.return_value.put_item.side_effect = _client_error("PutItem")

        assert repository.save_template(custom_template) is False

    def test_list_templates_follows_pagination(
        self,
        repository: CustomTemplateRepository,
        mock_dynamodb: MagicMock,
        custom_template: MenuTemplate,
    ) -> None:
        other = custom_template.model_copy(update={"id": "custom-def456", "name": "Alpha"})
        mock_dynamodb.Table.return_value.scan.side_effect = [
            {"Items": [custom_template.to_dynamodb_item()], "LastEvaluatedKey": {"template_id": "x"}},
            {"Items": [other.to_dynamodb_item()]},
        ]

        templates = repository.list_templates()

        assert [t.id for t in templates] == ["custom-def456", "custom-abc123"]
        second_call = mock_dynamodb.Table.return_value.scan.call_args_list[1]
        assert second_call.kwargs == {"ExclusiveStartKey": {"template_id": "x"}}

    def test_list_templates_dynamodb_error(
        self, repository: CustomTemplateRepository, mock_dynamodb: MagicMock
    ) -> None:
        mock_dynamodb.Table.return_value.scan.side_effect = _client_error("Scan")

        assert repository.list_templates() == []

    def test_delete_template(
        self, repository: CustomTemplateRepository, mock_dynamodb: MagicMock
    ) -> None:
        mock_dynamodb.Table.return_value.delete_item.return_value = {
            "Attributes": {"template_id": "custom-abc123"}
        }

        assert repository.delete_template("custom-abc123") is True

    def test_delete_missing_template(
        self, repository: CustomTemplateRepository, mock_dynamodb: MagicMock
    ) -> None:
        mock_dynamodb.Table.return_value.delete_item.return_value = {}

        assert repository.delete_template("missing") is False

    def test_delete_template_dynamodb_error(
        self, repository: CustomTemplateRepository, mock_dynamodb: MagicMock
    ) -> None:
        mock_dynamodb.Table.return_value.delete_item.side_effect = _client_error("DeleteItem")

        assert repository.delete_template("custom-abc123") is False

    @pytest.mark.parametrize(
        "corruption",
        [{"layout": "no-such-family"}, {"style": "{not json"}, {"style": None}],
    )
    def test_list_templates_skips_malformed_rows(
        self,
        repository: CustomTemplateRepository,
        mock_dynamodb: MagicMock,
        custom_template: MenuTemplate,
        corruption: dict,
    ) -> None:
        broken = {**custom_template.to_dynamodb_item(), "template_id": "custom-bad", **corruption}
        mock_dynamodb.Table.return_value.scan.return_value = {
            "Items": [broken, custom_template.to_dynamodb_item()]
        }

        templates = repository.list_templates()

        assert [t.id for t in templates] == ["custom-abc123"]

    def test_list_templates_skips_row_missing_style(
        self,
        repository: CustomTemplateRepository,
        mock_dynamodb: MagicMock,
        custom_template: MenuTemplate,
    ) -> None:
        broken = custom_template.to_dynamodb_item()
        del broken["style"]
        mock_dynamodb.Table.return_value.scan.return_value = {"Items": [broken]}

        assert repository.list_templates() == []

    def test_get_malformed_template_returns_none(
        self,
        repository: CustomTemplateRepository,
        mock_dynamodb: MagicMock,
        custom_template: MenuTemplate,
    ) -> None:
        broken = {**custom_template.to_dynamodb_item(), "layout": "no-such-family"}
        mock_dynamodb.Table.return_value.get_item.return_value = {"Item": broken}

        assert repository.get_template("custom-abc123") is None
