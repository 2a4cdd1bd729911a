"""
DynamoDB table component for shopping cart records.

Creates:
- Provisioned-capacity table keyed by the string attribute 'id'
- Server-side encryption with the AWS managed key (aws/dynamodb)

Only the partition key is declared on the table; every other attribute
written by the API (firstName, lastName, email, phone) is schemaless.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from cart_api.configs.base import EnvironmentConfig
from cart_api.configs.constants import TABLE_DEFAULTS
from cart_api.utils.tags import create_tags


@dataclass
class DynamoTableOutputs:
    """Output values from DynamoDB table component."""
    table_name: pulumi.Output[str]
    table_arn: pulumi.Output[str]


def table_options(
    parent: pulumi.Resource | None,
    retain_table: bool,
) -> pulumi.ResourceOptions:
    """Resource options for the table; retained tables survive stack deletion."""
    return pulumi.ResourceOptions(parent=parent, retain_on_delete=retain_table)


class DynamoTableComponent(pulumi.ComponentResource):
    """
    DynamoDB table written to by the API Gateway service integration.

    The physical table name is auto-generated by Pulumi from the logical name,
    so the request template receives it as an output.
    """

    def __init__(
        self,
        name: str,
        config: EnvironmentConfig,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:storage:DynamoTable", name, None, opts)

        partition_key = TABLE_DEFAULTS["partition_key"]

        table_opts = table_options(self, config.retain_table)

        self.table = aws.dynamodb.Table(
            f"{name}-table",
            attributes=[
                aws.dynamodb.TableAttributeArgs(
                    name=partition_key,
                    type=TABLE_DEFAULTS["partition_key_type"],
                ),
            ],
            hash_key=partition_key,
            billing_mode="PROVISIONED",
            read_capacity=config.read_capacity,
            write_capacity=config.write_capacity,
            # No KMS key ARN: DynamoDB uses the AWS managed key
            server_side_encryption=aws.dynamodb.TableServerSideEncryptionArgs(
                enabled=True,
            ),
            tags=create_tags(config.environment, f"{name}-table", Model=config.model_name),
            opts=table_opts,
        )

        if config.retain_table:
            pulumi.log.info(f"Table {name}-table is retained when the stack is destroyed")

        self.register_outputs({
            "table_name": self.table.name,
            "table_arn": self.table.arn,
        })

    def get_outputs(self) -> DynamoTableOutputs:
        """Get DynamoDB table output values."""
        return DynamoTableOutputs(
            table_name=self.table.name,
            table_arn=self.table.arn,
        )
