"""
IAM roles component for the API Gateway service integration.

Creates:
- Put role assumed by API Gateway, with an inline policy allowing only
  dynamodb:PutItem on the cart table
- Optional CloudWatch role used by the account-level API Gateway settings
"""

import json
from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from cart_api.configs.constants import API_GATEWAY_PRINCIPAL, CLOUDWATCH_PUSH_POLICY_ARN
from cart_api.utils.tags import create_tags


@dataclass
class IamRoleOutputs:
    """Output values from IAM roles component."""
    put_role_arn: pulumi.Output[str]
    cloudwatch_role_arn: pulumi.Output[str] | None


def assume_role_policy(service: str) -> str:
    """Trust policy letting an AWS service principal assume a role."""
    return json.dumps({
        "Version": "2012-10-17",
        "Statement": [{
            "Effect": "Allow",
            "Principal": {"Service": service},
            "Action": "sts:AssumeRole",
        }],
    })


def put_item_policy(table_arn: str) -> str:
    """Inline policy allowing PutItem on a single table."""
    return json.dumps({
        "Version": "2012-10-17",
        "Statement": [{
            "Effect": "Allow",
            "Action": ["dynamodb:PutItem"],
            "Resource": [table_arn],
        }],
    })


class IamRolesComponent(pulumi.ComponentResource):
    """
    IAM roles for API Gateway.

    Follows least-privilege principle: the integration role can write items
    to one table and nothing else.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        table_arn: pulumi.Input[str],
        enable_cloudwatch_role: bool = True,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:security:IamRoles", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.put_role = aws.iam.Role(
            f"{name}-put-role",
            assume_role_policy=assume_role_policy(API_GATEWAY_PRINCIPAL),
            tags=create_tags(environment, f"{name}-put-role"),
            opts=child_opts,
        )

        self.put_policy = aws.iam.RolePolicy(
            f"{name}-put-policy",
            role=self.put_role.id,
            policy=pulumi.Output.from_input(table_arn).apply(put_item_policy),
            opts=child_opts,
        )

        self.cloudwatch_role: aws.iam.Role | None = None
        self.cloudwatch_role_arn: pulumi.Output[str] | None = None
        if enable_cloudwatch_role:
            self.cloudwatch_role = aws.iam.Role(
                f"{name}-cloudwatch-role",
                assume_role_policy=assume_role_policy(API_GATEWAY_PRINCIPAL),
                tags=create_tags(environment, f"{name}-cloudwatch-role"),
                opts=child_opts,
            )

            self.cloudwatch_policy_attachment = aws.iam.RolePolicyAttachment(
                f"{name}-cloudwatch-push-logs",
                role=self.cloudwatch_role.name,
                policy_arn=CLOUDWATCH_PUSH_POLICY_ARN,
                opts=child_opts,
            )

            # API Gateway checks the role permissions when the account setting is
            # written, so consumers must wait for the attachment, not just the role
            self.cloudwatch_role_arn = pulumi.Output.all(
                self.cloudwatch_role.arn,
                self.cloudwatch_policy_attachment.id,
            ).apply(lambda values: values[0])

        self.register_outputs({
            "put_role_arn": self.put_role.arn,
            "cloudwatch_role_arn": self.cloudwatch_role_arn,
        })

    def get_outputs(self) -> IamRoleOutputs:
        """Get IAM role output values."""
        return IamRoleOutputs(
            put_role_arn=self.put_role.arn,
            cloudwatch_role_arn=self.cloudwatch_role_arn,
        )
