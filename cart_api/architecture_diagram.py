"""
Shopping Cart ingest API Architecture Diagram.

Generates the request path from producer to DynamoDB, including the IAM role
API Gateway assumes for the PutItem call.

Dependencies:
    pip install diagrams

Usage:
    python architecture_diagram.py
    # Outputs: shopping_cart_api_architecture.png
"""

from diagrams import Diagram, Cluster, Edge
from diagrams.aws.database import Dynamodb
from diagrams.aws.general import Users
from diagrams.aws.management import Cloudwatch
from diagrams.aws.network import APIGateway
from diagrams.aws.security import IAMRole

graph_attr = {
    "fontsize": "14",
    "bgcolor": "white",
    "pad": "0.5",
    "nodesep": "0.8",
    "ranksep": "1.2",
    "dpi": "300",
}

node_attr = {
    "fontsize": "11",
}

edge_attr = {
    "fontsize": "9",
}


with Diagram(
    "Shopping Cart Ingest API\n(API Gateway → DynamoDB, no compute)",
    filename="shopping_cart_api_architecture",
    show=False,
    direction="LR",
    graph_attr=graph_attr,
    node_attr=node_attr,
    edge_attr=edge_attr,
):
    producers = Users("Producers\n(Kafka topic consumer)")

    with Cluster("Edge Layer"):
        api = APIGateway("ShoppingCart Service\nREST API\nPOST /shoppingcart")

    with Cluster("IAM Security"):
        put_role = IAMRole("Put Role\ndynamodb:PutItem\n(table ARN only)")
        cloudwatch_role = IAMRole("CloudWatch Role\nAPI Gateway account")

    with Cluster("Storage Layer"):
        table = Dynamodb("ShoppingCart Table\npk: id (S)\n2 RCU / 2 WCU\nAWS managed KMS")

    logs = Cloudwatch("CloudWatch Logs")

    producers >> Edge(label="POST JSON\ncart + contact") >> api
    api >> Edge(label="assumes", style="dashed") >> put_role
    api >> Edge(label="PutItem\n(request template)", color="darkgreen") >> table
    table >> Edge(label="200 / 400 / 5xx\n(integration responses)", style="dotted") >> api
    api >> Edge(style="dashed") >> cloudwatch_role >> logs


print("✓ Architecture diagram generated: shopping_cart_api_architecture.png")
