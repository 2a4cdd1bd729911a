"""
Pulumi component resources for the Shopping Cart ingest API.

Each submodule provides reusable ComponentResource classes:
- storage: DynamoDB table
- security: IAM roles for API Gateway
- edge: REST API Gateway with the DynamoDB integration
"""
