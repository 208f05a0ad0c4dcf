"""Integration catalog entries: SQS queue and SNS topic."""

from ..entry import KnowledgeBaseEntry, OutputSpec
from ..kinds import ResourceKind

SQS_QUEUE_TEMPLATE = """# SQS Queue: {{label}}
resource "aws_sqs_queue" "{{name}}" {
  name                       = "{{queue_name}}"
  visibility_timeout_seconds = {{visibility_timeout_seconds}}
  message_retention_seconds  = {{message_retention_seconds}}
  sqs_managed_sse_enabled    = true
{{#delay_seconds}}  delay_seconds              = {{delay_seconds}}
{{/delay_seconds}}
  tags = {
    Name        = "{{label}}"
    Environment = var.environment
  }
}"""

SNS_TOPIC_TEMPLATE = """# SNS Topic: {{label}}
resource "aws_sns_topic" "{{name}}" {
  name = "{{topic_name}}"
{{#display_name}}  display_name = "{{display_name}}"
{{/display_name}}{{#kms_master_key_id}}  kms_master_key_id = "{{kms_master_key_id}}"
{{/kms_master_key_id}}
  tags = {
    Name        = "{{label}}"
    Environment = var.environment
  }
}"""

ENTRIES = (
    KnowledgeBaseEntry(
        kind=ResourceKind.SQS_QUEUE,
        category="integration",
        template=SQS_QUEUE_TEMPLATE,
        required_attributes=(
            "queue_name",
            "visibility_timeout_seconds",
            "message_retention_seconds",
        ),
        optional_attributes=("delay_seconds",),
        examples=(
            """resource "aws_sqs_queue" "jobs" {
  name                       = "jobs"
  visibility_timeout_seconds = 30
  sqs_managed_sse_enabled    = true
}""",
        ),
        advisories=(
            "Configure a dead letter queue",
            "Set the visibility timeout above the consumer's processing time",
            "Enable server-side encryption",
        ),
        outputs=(OutputSpec("sqs_queue_urls", "url", "URLs of the SQS queues"),),
    ),
    KnowledgeBaseEntry(
        kind=ResourceKind.SNS_TOPIC,
        category="integration",
        template=SNS_TOPIC_TEMPLATE,
        required_attributes=("topic_name",),
        optional_attributes=("display_name", "kms_master_key_id"),
        examples=(
            """resource "aws_sns_topic" "alerts" {
  name = "alerts"
}""",
        ),
        advisories=(
            "Encrypt topics with a KMS key",
            "Restrict publishers with a topic policy",
        ),
        outputs=(OutputSpec("sns_topic_arns", "arn", "ARNs of the SNS topics"),),
    ),
)
