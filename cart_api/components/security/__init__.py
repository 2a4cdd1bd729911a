"""
Security components for IAM.

Components:
- IamRolesComponent: PutItem integration role and API Gateway CloudWatch role
"""

from cart_api.components.security.iam_roles import IamRolesComponent, IamRoleOutputs

__all__ = [
    "IamRolesComponent",
    "IamRoleOutputs",
]
