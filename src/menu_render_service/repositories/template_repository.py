"""DynamoDB repository for user-authored templates.

Expected failures are reported through return values (None/False/[])
rather than exceptions; DynamoDB errors are logged.
"""

import logging
from typing import Any

from botocore.exceptions import ClientError
from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource, Table

from menu_render_service.models.menu_models import MenuTemplate

logger = logging.getLogger(__name__)


def _parse_template(item: dict[str, Any]) -> MenuTemplate | None:
    """Build a template from a stored row, None if the row is malformed."""
    try:
        return MenuTemplate.from_dynamodb_item(item)
    except (KeyError, TypeError, ValueError) as e:
        logger.warning(f"Skipping malformed custom template {item.get('template_id')}: {e}")
        return None


class CustomTemplateRepository:
    """Repository for custom template CRUD operations.

    Templates are keyed by ``template_id``; the style is stored as a JSON string.
    """

    def __init__(self, dynamodb_resource: DynamoDBServiceResource, table_name: str) -> None:
        """Initialize repository.

        Args:
            dynamodb_resource: Boto3 DynamoDB resource
            table_name: Name of the DynamoDB table
        """
        self.dynamodb = dynamodb_resource
        self.table_name = table_name
        self.table: Table = dynamodb_resource.Table(table_name)

    def get_template(self, template_id: str) -> MenuTemplate | None:
        """Retrieve a custom template by id.

        Returns:
            MenuTemplate if found and well-formed, None otherwise
        """
        try:
            response = self.table.get_item(Key={"template_id": template_id})

            if "Item" not in response:
                return None

            return _parse_template(response["Item"])

        except ClientError as e:
            logger.error(f"Failed to get custom template {template_id}: {e}")
            return None

    def save_template(self, template: MenuTemplate) -> bool:
        """Create or overwrite a custom template.

        Returns:
            bool: True if save succeeded, False otherwise
        """
        try:
            self.table.put_item(Item=template.to_dynamodb_item())
            return True

        except ClientError as e:
            logger.error(f"Failed to save custom template {template.id}: {e}")
            return False

    def list_templates(self) -> list[MenuTemplate]:
        """List every custom template, following scan pagination.

        Returns:
            list: Templates sorted by name (empty list on failure)
        """
        items: list[dict[str, Any]] = []
        scan_kwargs: dict[str, Any] = {}
        try:
            while True:
                response = self.table.scan(**scan_kwargs)
                items.extend(response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                scan_kwargs["ExclusiveStartKey"] = last_key

        except ClientError as e:
            logger.error(f"Failed to list custom templates: {e}")
            return []

        templates = [t for t in map(_parse_template, items) if t is not None]
        return sorted(templates, key=lambda t: (t.name, t.id))

    def delete_template(self, template_id: str) -> bool:
        """Delete a custom template.

        Returns:
            bool: True if an existing template was deleted, False otherwise
        """
        try:
            response = self.table.delete_item(
                Key={"template_id": template_id},
                ReturnValues="ALL_OLD",
            )
            return "Attributes" in response

        except ClientError as e:
            logger.error(f"Failed to delete custom template {template_id}: {e}")
            return False
