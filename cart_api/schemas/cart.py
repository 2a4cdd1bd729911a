"""
Shopping cart request schemas.

Request contract for POST /shoppingcart. API Gateway never runs these models;
they document the body the PutItem mapping template reads from and are
published as the API's request model.

Dependencies: pydantic
System role: Ingest API contract
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

JSON_SCHEMA_DRAFT_04 = "http://json-schema.org/draft-04/schema#"


class _ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class Cart(_ApiModel):
    """Cart reference; its id becomes the table partition key."""

    id: str = Field(min_length=1, description="Cart identifier")


class Phone(_ApiModel):
    """Contact phone details."""

    number: str = Field(description="Phone number as entered by the customer")


class Contact(_ApiModel):
    """Customer contact details stored with the cart."""

    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str
    phone: Phone


class CartRequest(_ApiModel):
    """Request schema for shopping cart ingestion."""

    cart: Cart
    contact: Contact


def _inline_refs(node: Any, defs: dict[str, Any]) -> Any:
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str) and ref.startswith("#/$defs/"):
            return _inline_refs(defs[ref.rsplit("/", 1)[-1]], defs)
        return {key: _inline_refs(value, defs) for key, value in node.items()}
    if isinstance(node, list):
        return [_inline_refs(item, defs) for item in node]
    return node


def to_api_gateway_schema(model: type[BaseModel]) -> dict[str, Any]:
    """
    Build a self-contained draft-04 JSON Schema for an API Gateway model.

    API Gateway models cannot reference local definitions, so nested models
    are inlined in place of their ``$ref``.

    Args:
        model: Pydantic model class describing the request body

    Returns:
        JSON Schema dictionary without ``$defs`` or local ``$ref`` entries
    """
    schema = model.model_json_schema(by_alias=True)
    defs = schema.pop("$defs", {})
    inlined = _inline_refs(schema, defs)
    return {"$schema": JSON_SCHEMA_DRAFT_04, **inlined}
