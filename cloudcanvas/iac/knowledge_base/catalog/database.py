"""Database catalog entries: RDS instance and DynamoDB table."""

from ..entry import KnowledgeBaseEntry, OutputSpec
from ..kinds import ResourceKind

DB_INSTANCE_TEMPLATE = """# RDS Database: {{label}}
resource "aws_security_group" "{{name}}_sg" {
  name_prefix = "{{name}}-sg-"
  description = "Security group for {{label}}"
{{#container_name}}  vpc_id      = aws_vpc.{{container_name}}.id
{{/container_name}}{{#standalone}}  vpc_id      = var.vpc_id
{{/standalone}}
  tags = {
    Name        = "{{label}} security group"
    Environment = var.environment
  }
}
{{#container_name}}
resource "aws_db_subnet_group" "{{name}}_subnets" {
  name       = "{{identifier}}-subnets"
  subnet_ids = aws_subnet.{{container_name}}_subnet[*].id

  tags = {
    Name        = "{{label}} subnet group"
    Environment = var.environment
  }
}
{{/container_name}}
resource "aws_db_instance" "{{name}}" {
  identifier                   = "{{identifier}}"
  engine                       = "{{engine}}"
  instance_class               = "{{instance_class}}"
  allocated_storage            = {{allocated_storage}}
  db_name                      = "{{db_name}}"
  username                     = "{{username}}"
  password                     = var.db_password
  port                         = {{port}}
  vpc_security_group_ids       = [aws_security_group.{{name}}_sg.id]
  storage_encrypted            = true
  backup_retention_period      = {{backup_retention_period}}
  backup_window                = "{{backup_window}}"
  maintenance_window           = "{{maintenance_window}}"
  multi_az                     = {{multi_az}}
  deletion_protection          = {{deletion_protection}}
  skip_final_snapshot          = {{skip_final_snapshot}}
  performance_insights_enabled = {{performance_insights_enabled}}
{{#engine_version}}  engine_version               = "{{engine_version}}"
{{/engine_version}}{{#parameter_group_name}}  parameter_group_name         = "{{parameter_group_name}}"
{{/parameter_group_name}}{{#container_name}}  db_subnet_group_name         = aws_db_subnet_group.{{name}}_subnets.name
{{/container_name}}
  tags = {
    Name        = "{{label}}"
    Environment = var.environment
  }
}"""

DYNAMODB_TABLE_TEMPLATE = """# DynamoDB Table: {{label}}
resource "aws_dynamodb_table" "{{name}}" {
  name         = "{{table_name}}"
  billing_mode = "{{billing_mode}}"
  hash_key     = "{{hash_key}}"

  attribute {
    name = "{{hash_key}}"
    type = "{{hash_key_type}}"
  }
{{#range_key}}
  range_key = "{{range_key}}"

  attribute {
    name = "{{range_key}}"
    type = "{{range_key_type}}"
  }
{{/range_key}}
  point_in_time_recovery {
    enabled = {{point_in_time_recovery}}
  }

  server_side_encryption {
    enabled = true
  }

  tags = {
    Name        = "{{label}}"
    Environment = var.environment
  }
}"""

ENTRIES = (
    KnowledgeBaseEntry(
        kind=ResourceKind.DB_INSTANCE,
        category="database",
        template=DB_INSTANCE_TEMPLATE,
        required_attributes=(
            "identifier",
            "engine",
            "instance_class",
            "allocated_storage",
            "db_name",
            "username",
            "port",
            "backup_retention_period",
            "backup_window",
            "maintenance_window",
            "multi_az",
            "deletion_protection",
            "skip_final_snapshot",
            "performance_insights_enabled",
        ),
        optional_attributes=("engine_version", "parameter_group_name"),
        examples=(
            """resource "aws_db_instance" "main" {
  identifier        = "${var.environment}-${var.application_name}-db"
  engine            = "postgres"
  engine_version    = "15"
  instance_class    = "db.t3.micro"
  allocated_storage = 20
  username          = "admin"
  password          = var.db_password
  storage_encrypted = true
}""",
        ),
        advisories=(
            "Enable multi-AZ for high availability",
            "Use encrypted storage",
            "Enable performance insights",
            "Enable deletion protection",
            "Use parameter groups for configuration",
            "Keep the master password out of the configuration",
        ),
        outputs=(OutputSpec("db_instance_endpoints", "endpoint", "Endpoints of the RDS instances"),),
    ),
    KnowledgeBaseEntry(
        kind=ResourceKind.DYNAMODB_TABLE,
        category="database",
        template=DYNAMODB_TABLE_TEMPLATE,
        required_attributes=(
            "table_name",
            "billing_mode",
            "hash_key",
            "hash_key_type",
            "point_in_time_recovery",
        ),
        optional_attributes=("range_key", "range_key_type"),
        examples=(
            """resource "aws_dynamodb_table" "sessions" {
  name         = "sessions"
  billing_mode = "PAY_PER_REQUEST"
  hash_key     = "id"

  attribute {
    name = "id"
    type = "S"
  }
}""",
        ),
        advisories=(
            "Use on-demand billing for unpredictable workloads",
            "Enable point-in-time recovery",
            "Design keys around access patterns",
        ),
        outputs=(OutputSpec("dynamodb_table_arns", "arn", "ARNs of the DynamoDB tables"),),
    ),
)
