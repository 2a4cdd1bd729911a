"""
Storage components for persistent data.

Components:
- DynamoTableComponent: Cart records keyed by cart id
"""

from cart_api.components.storage.dynamodb_table import DynamoTableComponent, DynamoTableOutputs

__all__ = [
    "DynamoTableComponent",
    "DynamoTableOutputs",
]
