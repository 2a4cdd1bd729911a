"""
Integration responses for the PutItem service integration.

API Gateway picks an integration response by matching the backend status code
against each ``selection_pattern`` (a regular expression that must match the
whole code). The response without a pattern is the default.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Sequence


def render_response_template(body: dict[str, Any]) -> str:
    """Serialise a response body as a JSON mapping template."""
    return json.dumps(body, indent=2)


@dataclass(frozen=True)
class IntegrationResponseSpec:
    """
    One integration response and the method status code it maps to.

    Attributes:
        status_code: Method response status code returned to the client
        template: application/json response mapping template
        selection_pattern: Regex matched against the backend status, None for default
    """
    status_code: str
    template: str
    selection_pattern: str | None = None

    def matches(self, backend_status: str) -> bool:
        if self.selection_pattern is None:
            return False
        return re.fullmatch(self.selection_pattern, backend_status) is not None


def default_integration_responses() -> list[IntegrationResponseSpec]:
    """Success returns the request id; client and server errors get a fixed message."""
    return [
        IntegrationResponseSpec(
            status_code="200",
            template=render_response_template({"requestId": "$context.requestId"}),
        ),
        IntegrationResponseSpec(
            status_code="400",
            selection_pattern="400",
            template=render_response_template({"error": "Bad input!"}),
        ),
        IntegrationResponseSpec(
            status_code="500",
            selection_pattern=r"5\d{2}",
            template=render_response_template({"error": "Internal Service Error!"}),
        ),
    ]


def select_integration_response(
    backend_status: str,
    responses: Sequence[IntegrationResponseSpec],
) -> IntegrationResponseSpec | None:
    """
    Return the response API Gateway would choose for a backend status code.

    The first response whose pattern matches wins; otherwise the default
    response (no pattern) is used. Returns None when nothing applies.
    """
    default = None
    for response in responses:
        if response.matches(backend_status):
            return response
        if response.selection_pattern is None and default is None:
            default = response
    return default


def validate_responses(
    responses: Sequence[IntegrationResponseSpec],
    declared_status_codes: Sequence[str],
) -> None:
    """
    Ensure every integration response maps to a declared method response.

    Raises:
        ValueError: If a status code is undeclared or more than one default exists
    """
    undeclared = [r.status_code for r in responses if r.status_code not in declared_status_codes]
    if undeclared:
        raise ValueError(f"Integration responses use undeclared status codes: {undeclared}")

    defaults = [r for r in responses if r.selection_pattern is None]
    if len(defaults) > 1:
        raise ValueError("Only one integration response may omit a selection pattern")
