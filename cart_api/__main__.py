"""
Pulumi program entry point for the Shopping Cart ingest API.

Instantiates all component resources in dependency order:
1. Configuration
2. DynamoDB table
3. IAM roles (PutItem policy needs the table ARN)
4. REST API (integration needs the table name and the put role)
"""

import pulumi
import pulumi_aws as aws

from cart_api.configs.environment import get_config
from cart_api.utils.naming import ResourceNamer
from cart_api.utils.outputs import write_outputs_to_env

from cart_api.components.storage.dynamodb_table import DynamoTableComponent
from cart_api.components.security.iam_roles import IamRolesComponent
from cart_api.components.edge.rest_api import RestApiComponent


def main() -> dict[str, pulumi.Output]:
    """Deploy the Shopping Cart ingest API and return the exported outputs."""
    config = get_config()
    namer = ResourceNamer(project="cart-api", environment=config.environment)

    aws_region = aws.get_region().region

    pulumi.log.info(
        f"Deploying {config.api_name} ({config.environment}) to {aws_region}"
    )

    # --- Layer 1: Storage ---
    table = DynamoTableComponent(
        name=namer.logical_name(config.model_name),
        config=config,
    )
    table_outputs = table.get_outputs()

    # --- Layer 2: IAM Roles ---
    iam_roles = IamRolesComponent(
        name=namer.name("apigw"),
        environment=config.environment,
        table_arn=table_outputs.table_arn,
        enable_cloudwatch_role=config.enable_cloudwatch_role,
    )
    iam_outputs = iam_roles.get_outputs()

    # --- Layer 3: Edge ---
    rest_api = RestApiComponent(
        name=namer.logical_name(config.model_name, "api"),
        config=config,
        region=aws_region,
        table_name=table_outputs.table_name,
        put_role_arn=iam_outputs.put_role_arn,
        cloudwatch_role_arn=iam_outputs.cloudwatch_role_arn,
    )
    api_outputs = rest_api.get_outputs()

    if not config.validate_request_body:
        pulumi.log.warn(
            "Request body validation is disabled; malformed bodies are written "
            "with empty attributes or rejected by DynamoDB"
        )

    # --- Exports ---
    outputs = {
        "table_name": table_outputs.table_name,
        "table_arn": table_outputs.table_arn,
        "put_role_arn": iam_outputs.put_role_arn,
        "api_id": api_outputs.api_id,
        "invoke_url": api_outputs.invoke_url,
        "endpoint_url": api_outputs.endpoint_url,
    }

    # Write outputs to .env file for local producers and smoke tests
    write_outputs_to_env(outputs, "infrastructure.env")

    # Export to Pulumi stack
    for key, value in outputs.items():
        pulumi.export(key, value)

    return outputs


# Pulumi runs the program as __main__
if __name__ == "__main__":
    main()
