"""
Infrastructure constants for the Shopping Cart ingest API.

Contains table defaults, API defaults, and default tags.
"""

from typing import Final

# Record type served by the API
DEFAULT_MODEL_NAME: Final[str] = "ShoppingCart"

DEFAULT_API_DESCRIPTION: Final[str] = (
    "This is a temporary api to store information from kafka Topic"
)

# DynamoDB configuration
TABLE_DEFAULTS: Final[dict[str, object]] = {
    "partition_key": "id",
    "partition_key_type": "S",
    "read_capacity": 2,
    "write_capacity": 2,
}

# API Gateway configuration
API_DEFAULTS: Final[dict[str, str]] = {
    "stage_name": "prod",
    "http_method": "POST",
    "integration_http_method": "POST",
    "dynamodb_action": "PutItem",
}

JSON_CONTENT_TYPE: Final[str] = "application/json"

# Status codes declared on the POST method
METHOD_RESPONSE_CODES: Final[tuple[str, ...]] = ("200", "400", "500")

API_GATEWAY_PRINCIPAL: Final[str] = "apigateway.amazonaws.com"

CLOUDWATCH_PUSH_POLICY_ARN: Final[str] = (
    "arn:aws:iam::aws:policy/service-role/AmazonAPIGatewayPushToCloudWatchLogs"
)

# Default tags applied to all resources
DEFAULT_TAGS: Final[dict[str, str]] = {
    "Project": "shopping-cart-api",
    "ManagedBy": "pulumi",
}
