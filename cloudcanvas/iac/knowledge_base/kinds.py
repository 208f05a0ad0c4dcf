"""Closed set of resource kinds the knowledge base understands."""

from enum import Enum
from typing import Dict, FrozenSet


class ResourceKind(str, Enum):
    """Supported resource kinds, in fuzzy-match tie-break order."""

    VPC = "aws_vpc"
    SUBNET = "aws_subnet"
    INSTANCE = "aws_instance"
    S3_BUCKET = "aws_s3_bucket"
    SECURITY_GROUP = "aws_security_group"
    DB_INSTANCE = "aws_db_instance"
    LAMBDA_FUNCTION = "aws_lambda_function"
    IAM_ROLE = "aws_iam_role"
    LOAD_BALANCER = "aws_lb"
    DYNAMODB_TABLE = "aws_dynamodb_table"
    SQS_QUEUE = "aws_sqs_queue"
    SNS_TOPIC = "aws_sns_topic"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def from_value(cls, value: str) -> "ResourceKind":
        """Return the kind whose value is exactly ``value``, else UNRECOGNIZED."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNRECOGNIZED

    @classmethod
    def supported(cls) -> list:
        """All kinds except UNRECOGNIZED, in declaration order."""
        return [kind for kind in cls if kind is not cls.UNRECOGNIZED]


# Kinds that contain other nodes; they are emitted before everything else.
GROUPING_KINDS: FrozenSet[ResourceKind] = frozenset({ResourceKind.VPC})

# Short ids used by the editor palette and diagram imports.
KIND_ALIASES: Dict[str, ResourceKind] = {
    "vpc": ResourceKind.VPC,
    "vpcgroup": ResourceKind.VPC,
    "network": ResourceKind.VPC,
    "subnet": ResourceKind.SUBNET,
    "ec2": ResourceKind.INSTANCE,
    "instance": ResourceKind.INSTANCE,
    "compute": ResourceKind.INSTANCE,
    "s3": ResourceKind.S3_BUCKET,
    "bucket": ResourceKind.S3_BUCKET,
    "object-storage": ResourceKind.S3_BUCKET,
    "sg": ResourceKind.SECURITY_GROUP,
    "security-group": ResourceKind.SECURITY_GROUP,
    "rds": ResourceKind.DB_INSTANCE,
    "database": ResourceKind.DB_INSTANCE,
    "managed-database": ResourceKind.DB_INSTANCE,
    "lambda": ResourceKind.LAMBDA_FUNCTION,
    "function": ResourceKind.LAMBDA_FUNCTION,
    "iam": ResourceKind.IAM_ROLE,
    "role": ResourceKind.IAM_ROLE,
    "elb": ResourceKind.LOAD_BALANCER,
    "alb": ResourceKind.LOAD_BALANCER,
    "load_balancer": ResourceKind.LOAD_BALANCER,
    "load-balancer": ResourceKind.LOAD_BALANCER,
    "dynamodb": ResourceKind.DYNAMODB_TABLE,
    "sqs": ResourceKind.SQS_QUEUE,
    "queue": ResourceKind.SQS_QUEUE,
    "sns": ResourceKind.SNS_TOPIC,
    "topic": ResourceKind.SNS_TOPIC,
}


def is_grouping(kind: ResourceKind) -> bool:
    """Return True if nodes of this kind may contain other nodes."""
    return kind in GROUPING_KINDS


def aliases_for(kind: ResourceKind) -> list:
    """Return the editor aliases that resolve to ``kind``, sorted."""
    return sorted(alias for alias, target in KIND_ALIASES.items() if target is kind)
