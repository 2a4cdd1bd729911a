"""
REST API Gateway component with a direct DynamoDB integration.

Concept: "Write the request body straight into the table, no compute in between."
API Gateway calls dynamodb:PutItem itself, using the put role as credentials.

The Resource Chain:
1. RestApi: The API container ("<Model> Service").
2. Resource: The URL path (/shoppingcart).
3. Method: POST with the declared method responses (200, 400, 500).
4. Integration: AWS service integration. The request template turns the JSON
   body into a PutItem payload.
5. Integration Responses: Map the DynamoDB status code to a method response
   by selection pattern and shape the response body.
6. Deployment + Stage: Publish the API. The deployment is replaced whenever
   the templates, the integration credentials or the body validator change,
   otherwise the stage would keep serving a stale snapshot.

Error Translation:
┌─────────────────────┬──────────────────────┬──────────────────────────────────┐
│ DynamoDB status     │ Selection pattern    │ Client sees                      │
├─────────────────────┼──────────────────────┼──────────────────────────────────┤
│ 200                 │ (default)            │ 200 {"requestId": ...}           │
│ 400                 │ 400                  │ 400 {"error": "Bad input!"}      │
│ 5xx                 │ 5\\d{2}               │ 500 {"error": "Internal ..."}    │
└─────────────────────┴──────────────────────┴──────────────────────────────────┘
"""

import hashlib
import json
from dataclasses import dataclass
from typing import Sequence

import pulumi
import pulumi_aws as aws

from cart_api.configs.base import EnvironmentConfig
from cart_api.configs.constants import API_DEFAULTS, JSON_CONTENT_TYPE, METHOD_RESPONSE_CODES
from cart_api.integration.request_mapping import (
    AttributeMapping,
    DEFAULT_ATTRIBUTE_MAPPINGS,
    build_put_item_template,
    validate_mappings,
)
from cart_api.integration.response_mapping import (
    IntegrationResponseSpec,
    default_integration_responses,
    validate_responses,
)
from cart_api.schemas.cart import CartRequest, to_api_gateway_schema
from cart_api.utils.tags import create_tags


@dataclass
class RestApiOutputs:
    """Output values from REST API component."""
    api_id: pulumi.Output[str]
    invoke_url: pulumi.Output[str]
    endpoint_url: pulumi.Output[str]


def dynamodb_action_uri(region: str, action: str = API_DEFAULTS["dynamodb_action"]) -> str:
    """Integration URI for a DynamoDB API action."""
    return f"arn:aws:apigateway:{region}:dynamodb:action/{action}"


def deployment_fingerprint(
    request_template: str,
    responses: Sequence[IntegrationResponseSpec],
    request_schema: str,
    credentials: str,
    validate_request_body: bool,
) -> str:
    """Stable hash of everything a deployment snapshot depends on."""
    material = json.dumps(
        {
            "request": request_template,
            "credentials": credentials,
            "validate_request_body": validate_request_body,
            "responses": [
                [r.status_code, r.selection_pattern, r.template] for r in responses
            ],
            "schema": request_schema,
        },
        sort_keys=True,
    )
    return hashlib.sha256(material.encode("utf-8")).hexdigest()


class RestApiComponent(pulumi.ComponentResource):
    """
    REST API exposing POST /<model> backed by DynamoDB PutItem.
    """

    def __init__(
        self,
        name: str,
        config: EnvironmentConfig,
        region: str,
        table_name: pulumi.Input[str],
        put_role_arn: pulumi.Input[str],
        cloudwatch_role_arn: pulumi.Input[str] | None = None,
        mappings: Sequence[AttributeMapping] = DEFAULT_ATTRIBUTE_MAPPINGS,
        responses: Sequence[IntegrationResponseSpec] | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        responses = list(responses) if responses is not None else default_integration_responses()

        # Fail before any resource is registered
        validate_mappings(mappings)
        validate_responses(responses, METHOD_RESPONSE_CODES)

        super().__init__("custom:edge:RestApi", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)
        environment = config.environment

        self.api = aws.apigateway.RestApi(
            f"{name}-api",
            name=config.api_name,
            description=config.api_description,
            tags=create_tags(environment, f"{name}-api"),
            opts=child_opts,
        )

        self.resource = aws.apigateway.Resource(
            f"{name}-resource",
            rest_api=self.api.id,
            parent_id=self.api.root_resource_id,
            path_part=config.resource_path,
            opts=child_opts,
        )

        # Request model published with the method; only enforced with a validator
        request_schema = json.dumps(to_api_gateway_schema(CartRequest))
        self.request_model = aws.apigateway.Model(
            f"{name}-request-model",
            rest_api=self.api.id,
            name=f"{config.model_name}Request",
            description=f"{config.model_name} ingest request body",
            content_type=JSON_CONTENT_TYPE,
            schema=request_schema,
            opts=child_opts,
        )

        self.request_validator: aws.apigateway.RequestValidator | None = None
        if config.validate_request_body:
            self.request_validator = aws.apigateway.RequestValidator(
                f"{name}-body-validator",
                rest_api=self.api.id,
                name=f"{name}-body-validator",
                validate_request_body=True,
                validate_request_parameters=False,
                opts=child_opts,
            )

        self.method = aws.apigateway.Method(
            f"{name}-post",
            rest_api=self.api.id,
            resource_id=self.resource.id,
            http_method=API_DEFAULTS["http_method"],
            authorization="NONE",
            request_models={JSON_CONTENT_TYPE: self.request_model.name},
            request_validator_id=self.request_validator.id if self.request_validator else None,
            opts=child_opts,
        )

        self.method_responses = {
            status_code: aws.apigateway.MethodResponse(
                f"{name}-post-{status_code}",
                rest_api=self.api.id,
                resource_id=self.resource.id,
                http_method=self.method.http_method,
                status_code=status_code,
                opts=child_opts,
            )
            for status_code in METHOD_RESPONSE_CODES
        }

        request_template = pulumi.Output.from_input(table_name).apply(
            lambda table: build_put_item_template(table, mappings)
        )

        self.integration = aws.apigateway.Integration(
            f"{name}-put-item",
            rest_api=self.api.id,
            resource_id=self.resource.id,
            http_method=self.method.http_method,
            type="AWS",
            integration_http_method=API_DEFAULTS["integration_http_method"],
            uri=dynamodb_action_uri(region),
            credentials=put_role_arn,
            request_templates={JSON_CONTENT_TYPE: request_template},
            opts=child_opts,
        )

        self.integration_responses = [
            aws.apigateway.IntegrationResponse(
                f"{name}-put-item-{spec.status_code}",
                rest_api=self.api.id,
                resource_id=self.resource.id,
                http_method=self.method.http_method,
                status_code=spec.status_code,
                selection_pattern=spec.selection_pattern,
                response_templates={JSON_CONTENT_TYPE: spec.template},
                opts=pulumi.ResourceOptions(
                    parent=self,
                    depends_on=[self.integration, self.method_responses[spec.status_code]],
                ),
            )
            for spec in responses
        ]

        self.deployment = aws.apigateway.Deployment(
            f"{name}-deployment",
            rest_api=self.api.id,
            description=f"{config.api_name} deployment",
            triggers={
                "redeployment": pulumi.Output.all(request_template, put_role_arn).apply(
                    lambda values: deployment_fingerprint(
                        values[0],
                        responses,
                        request_schema,
                        credentials=values[1],
                        validate_request_body=config.validate_request_body,
                    )
                ),
            },
            opts=pulumi.ResourceOptions(
                parent=self,
                depends_on=[self.integration, *self.integration_responses],
            ),
        )

        self.stage = aws.apigateway.Stage(
            f"{name}-stage",
            rest_api=self.api.id,
            deployment=self.deployment.id,
            stage_name=config.stage_name,
            tags=create_tags(environment, f"{name}-stage"),
            opts=child_opts,
        )

        self.account: aws.apigateway.Account | None = None
        if cloudwatch_role_arn is not None:
            self.account = aws.apigateway.Account(
                f"{name}-account",
                cloudwatch_role_arn=cloudwatch_role_arn,
                opts=child_opts,
            )

        self.endpoint_url = pulumi.Output.concat(
            self.stage.invoke_url, "/", config.resource_path
        )

        self.register_outputs({
            "api_id": self.api.id,
            "invoke_url": self.stage.invoke_url,
            "endpoint_url": self.endpoint_url,
        })

    def get_outputs(self) -> RestApiOutputs:
        """Get REST API output values."""
        return RestApiOutputs(
            api_id=self.api.id,
            invoke_url=self.stage.invoke_url,
            endpoint_url=self.endpoint_url,
        )
