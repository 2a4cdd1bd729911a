"""
Edge components for public ingress.

Components:
- RestApiComponent: REST API with the DynamoDB PutItem integration
"""

from cart_api.components.edge.rest_api import RestApiComponent, RestApiOutputs

__all__ = [
    "RestApiComponent",
    "RestApiOutputs",
]
