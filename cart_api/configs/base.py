"""
Base configuration dataclass for environment settings.

Provides type-safe configuration structure loaded from Pulumi stack configs.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EnvironmentConfig:
    """
    Environment-specific configuration for infrastructure deployment.

    Attributes:
        environment: Deployment environment (dev, staging, prod)
        model_name: Record type stored by the API (drives table, API and path names)
        read_capacity: Provisioned DynamoDB read capacity units
        write_capacity: Provisioned DynamoDB write capacity units
        api_description: Description shown on the REST API
        stage_name: API Gateway stage the deployment is published to
        retain_table: Keep the table when the stack is destroyed
        validate_request_body: Reject bodies that do not match the request model
        enable_cloudwatch_role: Configure the account-level API Gateway logging role
    """
    environment: str
    model_name: str
    read_capacity: int
    write_capacity: int
    api_description: str
    stage_name: str
    retain_table: bool
    validate_request_body: bool
    enable_cloudwatch_role: bool

    def __post_init__(self) -> None:
        if self.read_capacity < 1 or self.write_capacity < 1:
            raise ValueError(
                f"Table capacity must be at least 1 "
                f"(read={self.read_capacity}, write={self.write_capacity})"
            )
        if not self.model_name:
            raise ValueError("model_name must not be empty")

    @property
    def is_production(self) -> bool:
        """Check if this is a production environment."""
        return self.environment == "prod"

    @property
    def resource_path(self) -> str:
        """Get the API path part the records are posted to."""
        return self.model_name.lower()

    @property
    def api_name(self) -> str:
        """Get the REST API display name."""
        return f"{self.model_name} Service"

    def get_tags(self) -> dict[str, str]:
        """Get environment-specific tags."""
        return {
            "Environment": self.environment,
            "Model": self.model_name,
        }
