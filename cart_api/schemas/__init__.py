"""
Request schemas for the ingest API.
"""

from cart_api.schemas.cart import CartRequest, to_api_gateway_schema

__all__ = [
    "CartRequest",
    "to_api_gateway_schema",
]
