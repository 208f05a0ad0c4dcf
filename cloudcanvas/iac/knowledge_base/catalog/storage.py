"""Storage catalog entries."""

from ..entry import KnowledgeBaseEntry, OutputSpec
from ..kinds import ResourceKind

S3_BUCKET_TEMPLATE = """# S3 Bucket: {{label}}
resource "aws_s3_bucket" "{{name}}" {
  bucket        = "{{bucket}}"
  force_destroy = {{force_destroy}}

  tags = {
    Name        = "{{label}}"
    Environment = var.environment
  }
}

resource "aws_s3_bucket_versioning" "{{name}}_versioning" {
  bucket = aws_s3_bucket.{{name}}.id

  versioning_configuration {
    status = "{{versioning_status}}"
  }
}

resource "aws_s3_bucket_server_side_encryption_configuration" "{{name}}_encryption" {
  bucket = aws_s3_bucket.{{name}}.id

  rule {
    apply_server_side_encryption_by_default {
      sse_algorithm = "{{sse_algorithm}}"
    }
  }
}

resource "aws_s3_bucket_public_access_block" "{{name}}_public_access" {
  bucket = aws_s3_bucket.{{name}}.id

  block_public_acls       = true
  block_public_policy     = true
  ignore_public_acls      = true
  restrict_public_buckets = true
}
{{#expiration_days}}
resource "aws_s3_bucket_lifecycle_configuration" "{{name}}_lifecycle" {
  bucket = aws_s3_bucket.{{name}}.id

  rule {
    id     = "expire-objects"
    status = "Enabled"

    filter {}

    expiration {
      days = {{expiration_days}}
    }
  }
}
{{/expiration_days}}{{#cors_enabled}}
resource "aws_s3_bucket_cors_configuration" "{{name}}_cors" {
  bucket = aws_s3_bucket.{{name}}.id

  cors_rule {
    allowed_methods = ["GET", "HEAD"]
    allowed_origins = var.allowed_origins
    max_age_seconds = 3000
  }
}
{{/cors_enabled}}"""

ENTRIES = (
    KnowledgeBaseEntry(
        kind=ResourceKind.S3_BUCKET,
        category="storage",
        template=S3_BUCKET_TEMPLATE,
        required_attributes=("bucket", "force_destroy", "versioning_status", "sse_algorithm"),
        optional_attributes=("expiration_days", "cors_enabled"),
        examples=(
            """resource "aws_s3_bucket" "assets" {
  bucket = "${var.environment}-${var.application_name}-assets"
}

resource "aws_s3_bucket_versioning" "assets" {
  bucket = aws_s3_bucket.assets.id

  versioning_configuration {
    status = "Enabled"
  }
}""",
        ),
        advisories=(
            "Enable versioning for data protection",
            "Enforce encryption at rest using KMS",
            "Block public access by default",
            "Implement lifecycle policies for cost optimization",
            "Require SSL transport",
            "Implement proper access logging",
        ),
        outputs=(OutputSpec("s3_bucket_arns", "arn", "ARNs of the S3 buckets"),),
    ),
)
