"""
Resource-level tests using Pulumi's unit test mocks.

Components are constructed against a mocked engine; the mock records the
inputs every resource was registered with so the tests can inspect what
would be sent to AWS.
"""

import json

import pulumi
import pytest


class RecordingMocks(pulumi.runtime.Mocks):
    """Echo inputs back as outputs and fill in the attributes AWS computes."""

    def __init__(self):
        self.resources: dict[str, tuple[str, dict]] = {}

    def new_resource(self, args: pulumi.runtime.MockResourceArgs):
        self.resources[args.name] = (args.typ, dict(args.inputs))
        outputs = dict(args.inputs)

        if args.typ == "aws:dynamodb/table:Table":
            outputs.setdefault("name", f"{args.name}-physical")
            outputs["arn"] = f"arn:aws:dynamodb:us-east-1:123456789012:table/{outputs['name']}"
        elif args.typ == "aws:iam/role:Role":
            outputs.setdefault("name", args.name)
            outputs["arn"] = f"arn:aws:iam::123456789012:role/{args.name}"
        elif args.typ == "aws:apigateway/restApi:RestApi":
            outputs["rootResourceId"] = "root"
        elif args.typ == "aws:apigateway/stage:Stage":
            outputs["invokeUrl"] = (
                f"https://{args.inputs['restApi']}.execute-api.us-east-1.amazonaws.com/"
                f"{args.inputs['stageName']}"
            )

        return [f"{args.name}_id", outputs]

    def call(self, args: pulumi.runtime.MockCallArgs):
        if args.token == "aws:index/getRegion:getRegion":
            return {"id": "us-east-1", "name": "us-east-1", "region": "us-east-1"}
        return {}

    def inputs(self, name: str) -> dict:
        return self.resources[name][1]


MOCKS = RecordingMocks()
pulumi.runtime.set_mocks(MOCKS, project="shopping-cart-api", stack="test", preview=False)

from cart_api.components.edge.rest_api import RestApiComponent  # noqa: E402
from cart_api.components.security.iam_roles import IamRolesComponent  # noqa: E402
from cart_api.components.storage.dynamodb_table import (  # noqa: E402
    DynamoTableComponent,
    table_options,
)
from cart_api.configs.base import EnvironmentConfig  # noqa: E402
from cart_api.utils.outputs import write_outputs_to_env  # noqa: E402


def _config(**overrides) -> EnvironmentConfig:
    values = {
        "environment": "test",
        "model_name": "ShoppingCart",
        "read_capacity": 2,
        "write_capacity": 2,
        "api_description": "This is a temporary api to store information from kafka Topic",
        "stage_name": "prod",
        "retain_table": True,
        "validate_request_body": False,
        "enable_cloudwatch_role": True,
    }
    values.update(overrides)
    return EnvironmentConfig(**values)


def _build_api(name: str, **config_overrides) -> RestApiComponent:
    return RestApiComponent(
        name=name,
        config=_config(**config_overrides),
        region="us-east-1",
        table_name="carts-physical",
        put_role_arn="arn:aws:iam::123456789012:role/put",
    )


@pulumi.runtime.test
def test_table_key_capacity_and_encryption():
    component = DynamoTableComponent("cart-a", config=_config(read_capacity=3, write_capacity=4))

    def check(_):
        inputs = MOCKS.inputs("cart-a-table")
        assert inputs["hashKey"] == "id"
        assert inputs["attributes"] == [{"name": "id", "type": "S"}]
        assert inputs["billingMode"] == "PROVISIONED"
        assert inputs["readCapacity"] == 3
        assert inputs["writeCapacity"] == 4
        assert inputs["serverSideEncryption"]["enabled"] is True
        assert "kmsKeyArn" not in inputs["serverSideEncryption"]
        assert inputs["tags"]["Model"] == "ShoppingCart"

    return component.table.urn.apply(check)


@pulumi.runtime.test
def test_table_outputs():
    outputs = DynamoTableComponent("cart-b", config=_config()).get_outputs()

    def check(values):
        table_name, table_arn = values
        assert table_name == "cart-b-table-physical"
        assert table_arn.endswith(":table/cart-b-table-physical")

    return pulumi.Output.all(outputs.table_name, outputs.table_arn).apply(check)


@pulumi.runtime.test
def test_put_role_trusts_api_gateway_and_allows_only_put_item():
    table_arn = "arn:aws:dynamodb:us-east-1:123456789012:table/carts"
    component = IamRolesComponent("roles-a", environment="test", table_arn=table_arn)

    def check(_):
        trust = json.loads(MOCKS.inputs("roles-a-put-role")["assumeRolePolicy"])
        statement = trust["Statement"][0]
        assert statement["Principal"] == {"Service": "apigateway.amazonaws.com"}
        assert statement["Action"] == "sts:AssumeRole"

        policy = json.loads(MOCKS.inputs("roles-a-put-policy")["policy"])
        assert policy["Statement"] == [{
            "Effect": "Allow",
            "Action": ["dynamodb:PutItem"],
            "Resource": [table_arn],
        }]

    return pulumi.Output.all(component.put_role.urn, component.put_policy.urn).apply(check)


@pulumi.runtime.test
def test_cloudwatch_role_is_optional():
    component = IamRolesComponent(
        "roles-b",
        environment="test",
        table_arn="arn:aws:dynamodb:us-east-1:123456789012:table/carts",
        enable_cloudwatch_role=False,
    )

    assert component.cloudwatch_role is None
    assert component.get_outputs().cloudwatch_role_arn is None

    def check(_):
        assert "roles-b-cloudwatch-role" not in MOCKS.resources

    return component.put_policy.urn.apply(check)


@pulumi.runtime.test
def test_cloudwatch_role_gets_push_logs_policy():
    component = IamRolesComponent(
        "roles-c",
        environment="test",
        table_arn="arn:aws:dynamodb:us-east-1:123456789012:table/carts",
    )

    def check(_):
        attachment = MOCKS.inputs("roles-c-cloudwatch-push-logs")
        assert attachment["policyArn"].endswith("AmazonAPIGatewayPushToCloudWatchLogs")

    return component.cloudwatch_policy_attachment.urn.apply(check)


@pulumi.runtime.test
def test_api_resource_and_method():
    component = _build_api("api-a")

    def check(_):
        api = MOCKS.inputs("api-a-api")
        assert api["name"] == "ShoppingCart Service"
        assert api["description"] == (
            "This is a temporary api to store information from kafka Topic"
        )

        resource = MOCKS.inputs("api-a-resource")
        assert resource["pathPart"] == "shoppingcart"
        assert resource["parentId"] == "root"

        method = MOCKS.inputs("api-a-post")
        assert method["httpMethod"] == "POST"
        assert method["authorization"] == "NONE"
        assert method["requestModels"] == {"application/json": "ShoppingCartRequest"}
        assert "requestValidatorId" not in method

        codes = sorted(
            MOCKS.inputs(f"api-a-post-{code}")["statusCode"] for code in ("200", "400", "500")
        )
        assert codes == ["200", "400", "500"]

    return component.stage.urn.apply(check)


@pulumi.runtime.test
def test_put_item_integration():
    component = _build_api("api-b")

    def check(_):
        integration = MOCKS.inputs("api-b-put-item")
        assert integration["type"] == "AWS"
        assert integration["integrationHttpMethod"] == "POST"
        assert integration["uri"] == "arn:aws:apigateway:us-east-1:dynamodb:action/PutItem"
        assert integration["credentials"] == "arn:aws:iam::123456789012:role/put"

        template = json.loads(integration["requestTemplates"]["application/json"])
        assert template["TableName"] == "carts-physical"
        assert template["Item"]["id"] == {"S": "$input.path('$.cart.id')"}
        assert template["Item"]["phone"] == {"S": "$input.path('$.contact.phone.number')"}

    return component.integration.urn.apply(check)


@pulumi.runtime.test
def test_integration_responses():
    component = _build_api("api-c")

    def check(_):
        ok = MOCKS.inputs("api-c-put-item-200")
        bad = MOCKS.inputs("api-c-put-item-400")
        err = MOCKS.inputs("api-c-put-item-500")

        assert ok.get("selectionPattern") is None
        assert bad["selectionPattern"] == "400"
        assert err["selectionPattern"] == r"5\d{2}"
        assert json.loads(ok["responseTemplates"]["application/json"]) == {
            "requestId": "$context.requestId",
        }
        assert json.loads(err["responseTemplates"]["application/json"]) == {
            "error": "Internal Service Error!",
        }

    return pulumi.Output.all(*[r.urn for r in component.integration_responses]).apply(check)


@pulumi.runtime.test
def test_stage_and_endpoint_url():
    component = _build_api("api-d", stage_name="v1")

    def check(values):
        invoke_url, endpoint_url = values
        assert MOCKS.inputs("api-d-stage")["stageName"] == "v1"
        assert MOCKS.inputs("api-d-stage")["deployment"] == "api-d-deployment_id"
        assert invoke_url == "https://api-d-api_id.execute-api.us-east-1.amazonaws.com/v1"
        assert endpoint_url == invoke_url + "/shoppingcart"

    outputs = component.get_outputs()
    return pulumi.Output.all(outputs.invoke_url, outputs.endpoint_url).apply(check)


@pulumi.runtime.test
def test_deployment_redeploys_on_template_change():
    first = RestApiComponent(
        name="api-e",
        config=_config(),
        region="us-east-1",
        table_name="table-one",
        put_role_arn="arn:aws:iam::123456789012:role/put",
    )
    second = RestApiComponent(
        name="api-f",
        config=_config(),
        region="us-east-1",
        table_name="table-two",
        put_role_arn="arn:aws:iam::123456789012:role/put",
    )

    def check(_):
        first_trigger = MOCKS.inputs("api-e-deployment")["triggers"]["redeployment"]
        second_trigger = MOCKS.inputs("api-f-deployment")["triggers"]["redeployment"]
        assert first_trigger != second_trigger

    return pulumi.Output.all(first.deployment.urn, second.deployment.urn).apply(check)


@pulumi.runtime.test
def test_request_validation_enabled():
    component = _build_api("api-g", validate_request_body=True)

    def check(_):
        validator = MOCKS.inputs("api-g-body-validator")
        assert validator["validateRequestBody"] is True
        assert MOCKS.inputs("api-g-post")["requestValidatorId"] == "api-g-body-validator_id"

        schema = json.loads(MOCKS.inputs("api-g-request-model")["schema"])
        assert schema["$schema"] == "http://json-schema.org/draft-04/schema#"

    return component.method.urn.apply(check)


@pulumi.runtime.test
def test_account_cloudwatch_role():
    component = RestApiComponent(
        name="api-h",
        config=_config(),
        region="us-east-1",
        table_name="carts",
        put_role_arn="arn:aws:iam::123456789012:role/put",
        cloudwatch_role_arn="arn:aws:iam::123456789012:role/cloudwatch",
    )

    def check(_):
        assert MOCKS.inputs("api-h-account")["cloudwatchRoleArn"] == (
            "arn:aws:iam::123456789012:role/cloudwatch"
        )

    return component.account.urn.apply(check)


def test_invalid_mapping_fails_before_registration():
    """Template errors surface while the program is evaluated."""
    from cart_api.integration.request_mapping import AttributeMapping, MappingTemplateError

    with pytest.raises(MappingTemplateError):
        RestApiComponent(
            name="api-i",
            config=_config(),
            region="us-east-1",
            table_name="carts",
            put_role_arn="arn:aws:iam::123456789012:role/put",
            mappings=[AttributeMapping("email", "$.contact.email")],
        )

    assert "api-i-api" not in MOCKS.resources


@pytest.mark.parametrize("retain", [True, False])
def test_table_retention_follows_config(retain):
    opts = table_options(None, retain)

    assert opts.retain_on_delete is retain


@pulumi.runtime.test
def test_deployment_redeploys_when_body_validation_toggles():
    plain = _build_api("api-j", validate_request_body=False)
    validated = _build_api("api-k", validate_request_body=True)

    def check(_):
        plain_trigger = MOCKS.inputs("api-j-deployment")["triggers"]["redeployment"]
        validated_trigger = MOCKS.inputs("api-k-deployment")["triggers"]["redeployment"]
        assert plain_trigger != validated_trigger

    return pulumi.Output.all(plain.deployment.urn, validated.deployment.urn).apply(check)


@pulumi.runtime.test
def test_deployment_redeploys_when_credentials_change():
    old = RestApiComponent(
        name="api-l",
        config=_config(),
        region="us-east-1",
        table_name="carts",
        put_role_arn="arn:aws:iam::123456789012:role/old",
    )
    new = RestApiComponent(
        name="api-m",
        config=_config(),
        region="us-east-1",
        table_name="carts",
        put_role_arn=pulumi.Output.from_input("arn:aws:iam::123456789012:role/new"),
    )

    def check(_):
        old_trigger = MOCKS.inputs("api-l-deployment")["triggers"]["redeployment"]
        new_trigger = MOCKS.inputs("api-m-deployment")["triggers"]["redeployment"]
        assert old_trigger != new_trigger

    return pulumi.Output.all(old.deployment.urn, new.deployment.urn).apply(check)


@pulumi.runtime.test
def test_account_waits_for_cloudwatch_policy_attachment():
    roles = IamRolesComponent(
        "roles-d",
        environment="test",
        table_arn="arn:aws:dynamodb:us-east-1:123456789012:table/carts",
    )
    component = RestApiComponent(
        name="api-n",
        config=_config(),
        region="us-east-1",
        table_name="carts",
        put_role_arn=roles.get_outputs().put_role_arn,
        cloudwatch_role_arn=roles.get_outputs().cloudwatch_role_arn,
    )

    def check(_):
        registered = list(MOCKS.resources)
        assert registered.index("roles-d-cloudwatch-push-logs") < registered.index("api-n-account")
        assert MOCKS.inputs("api-n-account")["cloudwatchRoleArn"] == (
            "arn:aws:iam::123456789012:role/roles-d-cloudwatch-role"
        )

    return component.account.urn.apply(check)


@pulumi.runtime.test
def test_outputs_written_to_env_file(tmp_path):
    target = tmp_path / "infrastructure.env"

    written = write_outputs_to_env(
        {
            "table_name": "carts",
            "endpoint_url": pulumi.Output.from_input("https://abc.example/prod/shoppingcart"),
            "cloudwatch_role_arn": None,
        },
        str(target),
    )

    def check(path):
        assert path == str(target)
        assert target.read_text() == (
            "TABLE_NAME=carts\n"
            "ENDPOINT_URL=https://abc.example/prod/shoppingcart\n"
        )

    return written.apply(check)


def test_env_file_skipped_during_preview(tmp_path, monkeypatch):
    monkeypatch.setattr(pulumi.runtime, "is_dry_run", lambda: True)
    target = tmp_path / "infrastructure.env"

    assert write_outputs_to_env({"table_name": "carts"}, str(target)) is None
    assert not target.exists()


@pulumi.runtime.test
def test_program_wires_components_and_exports(tmp_path, monkeypatch):
    import cart_api.__main__ as program

    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(program, "get_config", lambda: _config(environment="main"))

    outputs = program.main()

    def check(values):
        assert set(values) == {
            "table_name",
            "table_arn",
            "put_role_arn",
            "api_id",
            "invoke_url",
            "endpoint_url",
        }
        assert values["table_name"] == "cart-api-main-shopping-cart-table-physical"
        assert values["put_role_arn"] == (
            "arn:aws:iam::123456789012:role/cart-api-main-apigw-put-role"
        )
        assert values["endpoint_url"] == (
            "https://cart-api-main-shopping-cart-api-api_id.execute-api.us-east-1"
            ".amazonaws.com/prod/shoppingcart"
        )

        integration = MOCKS.inputs("cart-api-main-shopping-cart-api-put-item")
        assert integration["credentials"] == values["put_role_arn"]
        assert integration["uri"] == "arn:aws:apigateway:us-east-1:dynamodb:action/PutItem"
        template = json.loads(integration["requestTemplates"]["application/json"])
        assert template["TableName"] == values["table_name"]

    return pulumi.Output.all(**outputs).apply(check)
