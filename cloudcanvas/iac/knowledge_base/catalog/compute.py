"""Compute catalog entries: EC2 instance and Lambda function."""

from ..entry import KnowledgeBaseEntry, OutputSpec
from ..kinds import ResourceKind

INSTANCE_TEMPLATE = """# EC2 Instance: {{label}}
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

resource "aws_security_group_rule" "{{name}}_sg_egress" {
  type              = "egress"
  from_port         = 0
  to_port           = 0
  protocol          = "-1"
  cidr_blocks       = ["0.0.0.0/0"]
  security_group_id = aws_security_group.{{name}}_sg.id
}
{{#container_name}}
resource "aws_security_group_rule" "{{name}}_ssh_from_vpc" {
  type              = "ingress"
  from_port         = 22
  to_port           = 22
  protocol          = "tcp"
  cidr_blocks       = ["{{container_cidr_block}}"]
  security_group_id = aws_security_group.{{name}}_sg.id
  description       = "SSH from inside {{container_label}}"
}
{{/container_name}}
resource "aws_instance" "{{name}}" {
  ami                         = "{{ami}}"
  instance_type               = "{{instance_type}}"
  vpc_security_group_ids      = [aws_security_group.{{name}}_sg.id]
  associate_public_ip_address = {{associate_public_ip}}
{{#container_name}}  subnet_id                   = aws_subnet.{{container_name}}_subnet[0].id
{{/container_name}}{{#key_name}}  key_name                    = "{{key_name}}"
{{/key_name}}
  root_block_device {
    volume_type           = "gp3"
    volume_size           = {{root_volume_size}}
    delete_on_termination = true
    encrypted             = true
  }

  metadata_options {
    http_endpoint = "enabled"
    http_tokens   = "required"
  }

  monitoring    = true
  ebs_optimized = true

  tags = {
    Name        = "{{label}}"
    Environment = var.environment
    Application = var.application_name
  }
}"""

LAMBDA_TEMPLATE = """# Lambda Function: {{label}}
resource "aws_iam_role" "{{name}}_role" {
  name = "{{function_name}}-role"

  assume_role_policy = jsonencode({
    Version = "2012-10-17"
    Statement = [
      {
        Action    = "sts:AssumeRole"
        Effect    = "Allow"
        Principal = { Service = "lambda.amazonaws.com" }
      }
    ]
  })
}

resource "aws_iam_role_policy_attachment" "{{name}}_basic_execution" {
  role       = aws_iam_role.{{name}}_role.name
  policy_arn = "arn:aws:iam::aws:policy/service-role/AWSLambdaBasicExecutionRole"
}
{{#container_name}}
resource "aws_iam_role_policy_attachment" "{{name}}_vpc_access" {
  role       = aws_iam_role.{{name}}_role.name
  policy_arn = "arn:aws:iam::aws:policy/service-role/AWSLambdaVPCAccessExecutionRole"
}
{{/container_name}}
resource "aws_security_group" "{{name}}_sg" {
  name_prefix = "{{name}}-sg-"
  description = "Security group for {{label}}"
{{#container_name}}  vpc_id      = aws_vpc.{{container_name}}.id
{{/container_name}}{{#standalone}}  vpc_id      = var.vpc_id
{{/standalone}}}

resource "aws_security_group_rule" "{{name}}_sg_egress" {
  type              = "egress"
  from_port         = 0
  to_port           = 0
  protocol          = "-1"
  cidr_blocks       = ["0.0.0.0/0"]
  security_group_id = aws_security_group.{{name}}_sg.id
}

resource "aws_lambda_function" "{{name}}" {
  filename                       = "{{filename}}"
  function_name                  = "{{function_name}}"
  role                           = aws_iam_role.{{name}}_role.arn
  handler                        = "{{handler}}"
  runtime                        = "{{runtime}}"
  timeout                        = {{timeout}}
  memory_size                    = {{memory_size}}
  reserved_concurrent_executions = {{reserved_concurrent_executions}}

  tracing_config {
    mode = "{{tracing_mode}}"
  }
{{#container_name}}
  vpc_config {
    subnet_ids         = aws_subnet.{{container_name}}_subnet[*].id
    security_group_ids = [aws_security_group.{{name}}_sg.id]
  }
{{/container_name}}
  environment {
    variables = {
      ENVIRONMENT     = var.environment
      ALLOWED_ORIGINS = join(",", var.allowed_origins)
    }
  }

  tags = {
    Name        = "{{label}}"
    Environment = var.environment
    Application = var.application_name
  }
}"""

ENTRIES = (
    KnowledgeBaseEntry(
        kind=ResourceKind.INSTANCE,
        category="compute",
        template=INSTANCE_TEMPLATE,
        required_attributes=(
            "ami",
            "instance_type",
            "associate_public_ip",
            "root_volume_size",
        ),
        optional_attributes=("key_name",),
        examples=(
            """resource "aws_instance" "web" {
  ami           = data.aws_ami.amazon_linux.id
  instance_type = "t3.micro"

  metadata_options {
    http_endpoint = "enabled"
    http_tokens   = "required"
  }

  tags = {
    Name        = "web-server"
    Environment = var.environment
  }
}""",
        ),
        advisories=(
            "Use IMDSv2 (HTTP tokens required)",
            "Enable encryption at rest for all volumes",
            "Use gp3 volumes for better performance control",
            "Enable detailed monitoring",
            "Attach IAM roles instead of storing credentials",
            "Implement proper network segmentation",
        ),
        outputs=(
            OutputSpec("instance_ids", "id", "IDs of the EC2 instances"),
            OutputSpec("instance_private_ips", "private_ip", "Private IPs of the EC2 instances"),
        ),
    ),
    KnowledgeBaseEntry(
        kind=ResourceKind.LAMBDA_FUNCTION,
        category="compute",
        template=LAMBDA_TEMPLATE,
        required_attributes=(
            "filename",
            "function_name",
            "handler",
            "runtime",
            "timeout",
            "memory_size",
            "reserved_concurrent_executions",
            "tracing_mode",
        ),
        examples=(
            """resource "aws_lambda_function" "api" {
  filename      = "lambda_function.zip"
  function_name = "api-handler"
  role          = aws_iam_role.lambda_role.arn
  handler       = "index.handler"
  runtime       = "python3.13"

  tracing_config {
    mode = "Active"
  }
}""",
        ),
        advisories=(
            "Use VPC configuration for private resources",
            "Enable active tracing with X-Ray",
            "Set appropriate timeout and memory limits",
            "Use reserved concurrency for critical functions",
            "Use dead letter queues for error handling",
        ),
        outputs=(
            OutputSpec("lambda_function_arns", "arn", "ARNs of the Lambda functions"),
            OutputSpec("lambda_function_names", "function_name", "Names of the Lambda functions"),
        ),
    ),
)
