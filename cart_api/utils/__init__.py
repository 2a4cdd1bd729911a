"""
Utility functions for Pulumi infrastructure.

Provides naming conventions, tag factories, and output utilities.
"""

from cart_api.utils.naming import ResourceNamer
from cart_api.utils.tags import create_tags, merge_tags
from cart_api.utils.outputs import write_outputs_to_env

__all__ = [
    "ResourceNamer",
    "create_tags",
    "merge_tags",
    "write_outputs_to_env",
]
