"""
Request mapping template for the DynamoDB PutItem service integration.

API Gateway evaluates the rendered template (VTL) for every request and sends
the result to DynamoDB as the PutItem payload. Each mapped attribute pulls one
value out of the JSON request body with ``$input.path``.
"""

import json
from dataclasses import dataclass

from cart_api.configs.constants import TABLE_DEFAULTS

DYNAMODB_SCALAR_TYPES = frozenset({"S", "N", "B"})


class MappingTemplateError(ValueError):
    """Raised when an attribute mapping cannot produce a valid PutItem template."""


@dataclass(frozen=True)
class AttributeMapping:
    """
    One table attribute filled from the request body.

    Attributes:
        attribute: DynamoDB attribute name
        json_path: JSONPath into the request body (e.g. '$.cart.id')
        type: DynamoDB scalar type descriptor (S, N or B)
    """
    attribute: str
    json_path: str
    type: str = "S"

    def to_template_value(self) -> dict[str, str]:
        """Typed attribute value with the VTL extraction expression."""
        return {self.type: f"$input.path('{self.json_path}')"}


DEFAULT_ATTRIBUTE_MAPPINGS: tuple[AttributeMapping, ...] = (
    AttributeMapping("id", "$.cart.id"),
    AttributeMapping("firstName", "$.contact.firstName"),
    AttributeMapping("lastName", "$.contact.lastName"),
    AttributeMapping("email", "$.contact.email"),
    AttributeMapping("phone", "$.contact.phone.number"),
)


def validate_mappings(
    mappings: tuple[AttributeMapping, ...] | list[AttributeMapping],
    partition_key: str = TABLE_DEFAULTS["partition_key"],
) -> None:
    """
    Check that the mappings describe a writable item.

    Raises:
        MappingTemplateError: If the mapping set is empty, repeats an attribute,
            uses an unsupported type or path, or omits the partition key
    """
    if not mappings:
        raise MappingTemplateError("At least one attribute mapping is required")

    seen: set[str] = set()
    for mapping in mappings:
        if not mapping.attribute:
            raise MappingTemplateError("Attribute name must not be empty")
        if mapping.attribute in seen:
            raise MappingTemplateError(f"Duplicate attribute mapping: {mapping.attribute}")
        seen.add(mapping.attribute)

        if mapping.type not in DYNAMODB_SCALAR_TYPES:
            raise MappingTemplateError(
                f"Unsupported DynamoDB type {mapping.type!r} for {mapping.attribute}"
            )
        if not mapping.json_path.startswith("$.") or "'" in mapping.json_path:
            raise MappingTemplateError(
                f"Invalid JSON path {mapping.json_path!r} for {mapping.attribute}"
            )

    if partition_key not in seen:
        raise MappingTemplateError(
            f"Partition key {partition_key!r} is not mapped from the request body"
        )


def build_put_item_template(
    table_name: str,
    mappings: tuple[AttributeMapping, ...] | list[AttributeMapping] = DEFAULT_ATTRIBUTE_MAPPINGS,
    partition_key: str = TABLE_DEFAULTS["partition_key"],
) -> str:
    """
    Render the PutItem request template.

    Args:
        table_name: Physical name of the target table
        mappings: Attribute mappings, in item order
        partition_key: Table partition key that must be present in the item

    Returns:
        JSON text with embedded ``$input.path`` expressions
    """
    if not table_name:
        raise MappingTemplateError("Table name must not be empty")
    validate_mappings(mappings, partition_key)

    payload = {
        "TableName": table_name,
        "Item": {m.attribute: m.to_template_value() for m in mappings},
    }
    return json.dumps(payload, indent=2)
