"""
Pulumi infrastructure-as-code for the Shopping Cart ingest API.

This package defines AWS infrastructure including:
- DynamoDB table holding shopping cart contact records
- IAM role that lets API Gateway call DynamoDB directly
- REST API Gateway endpoint with a PutItem service integration
"""
