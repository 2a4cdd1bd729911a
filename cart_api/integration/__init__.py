"""
Mapping templates for the API Gateway to DynamoDB service integration.

Modules:
- request_mapping: request body fields to PutItem item attributes
- response_mapping: backend status codes to client responses
"""

from cart_api.integration.request_mapping import (
    AttributeMapping,
    DEFAULT_ATTRIBUTE_MAPPINGS,
    MappingTemplateError,
    build_put_item_template,
)
from cart_api.integration.response_mapping import (
    IntegrationResponseSpec,
    default_integration_responses,
    select_integration_response,
)

__all__ = [
    "AttributeMapping",
    "DEFAULT_ATTRIBUTE_MAPPINGS",
    "MappingTemplateError",
    "build_put_item_template",
    "IntegrationResponseSpec",
    "default_integration_responses",
    "select_integration_response",
]
