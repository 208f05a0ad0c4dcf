"""Security catalog entries: security group and IAM role."""

from ..entry import KnowledgeBaseEntry, OutputSpec
from ..kinds import ResourceKind

SECURITY_GROUP_TEMPLATE = """# Security Group: {{label}}
resource "aws_security_group" "{{name}}" {
  name_prefix            = "{{name}}-"
  description            = "{{description}}"
  revoke_rules_on_delete = {{revoke_rules_on_delete}}
{{#container_name}}  vpc_id                 = aws_vpc.{{container_name}}.id
{{/container_name}}{{#standalone}}  vpc_id                 = var.vpc_id
{{/standalone}}
  tags = {
    Name        = "{{label}}"
    Environment = var.environment
  }
}

resource "aws_security_group_rule" "{{name}}_egress" {
  type              = "egress"
  from_port         = 0
  to_port           = 0
  protocol          = "-1"
  cidr_blocks       = ["0.0.0.0/0"]
  security_group_id = aws_security_group.{{name}}.id
}
{{#ingress_port}}
resource "aws_security_group_rule" "{{name}}_ingress" {
  type              = "ingress"
  from_port         = {{ingress_port}}
  to_port           = {{ingress_port}}
  protocol          = "tcp"
  cidr_blocks       = ["{{ingress_cidr}}"]
  security_group_id = aws_security_group.{{name}}.id
}
{{/ingress_port}}"""

IAM_ROLE_TEMPLATE = """# IAM Role: {{label}}
resource "aws_iam_role" "{{name}}" {
  name = "{{role_name}}"

  assume_role_policy = jsonencode({
    Version = "2012-10-17"
    Statement = [
      {
        Action    = "{{assume_role_action}}"
        Effect    = "Allow"
        Principal = { Service = "{{assume_role_service}}" }
      }
    ]
  })

  tags = {
    Name        = "{{label}}"
    Environment = var.environment
  }
}
{{#managed_policy_arn}}
resource "aws_iam_role_policy_attachment" "{{name}}_managed" {
  role       = aws_iam_role.{{name}}.name
  policy_arn = "{{managed_policy_arn}}"
}
{{/managed_policy_arn}}"""

ENTRIES = (
    KnowledgeBaseEntry(
        kind=ResourceKind.SECURITY_GROUP,
        category="security",
        template=SECURITY_GROUP_TEMPLATE,
        required_attributes=("description", "revoke_rules_on_delete"),
        optional_attributes=("ingress_port", "ingress_cidr"),
        examples=(
            """resource "aws_security_group" "web" {
  name_prefix = "web-"
  description = "Web tier"
  vpc_id      = aws_vpc.main.id
}

resource "aws_security_group_rule" "web_https" {
  type              = "ingress"
  from_port         = 443
  to_port           = 443
  protocol          = "tcp"
  cidr_blocks       = ["0.0.0.0/0"]
  security_group_id = aws_security_group.web.id
}""",
        ),
        advisories=(
            "Use security group rules instead of inline rules for complex setups",
            "Revoke rules on delete to prevent orphaned rules",
            "Use source security groups instead of IP ranges when possible",
            "Implement least privilege access",
        ),
        outputs=(OutputSpec("security_group_ids", "id", "IDs of the security groups"),),
    ),
    KnowledgeBaseEntry(
        kind=ResourceKind.IAM_ROLE,
        category="security",
        template=IAM_ROLE_TEMPLATE,
        required_attributes=("role_name", "assume_role_action", "assume_role_service"),
        optional_attributes=("managed_policy_arn",),
        examples=(
            """resource "aws_iam_role" "app" {
  name = "app-role"

  assume_role_policy = jsonencode({
    Version = "2012-10-17"
    Statement = [{
      Action    = "sts:AssumeRole"
      Effect    = "Allow"
      Principal = { Service = "ec2.amazonaws.com" }
    }]
  })
}""",
        ),
        advisories=(
            "Use managed policies when possible",
            "Implement least-privilege access",
            "Use IAM roles instead of long-term access keys",
            "Use permission boundaries for organizational controls",
        ),
        outputs=(OutputSpec("iam_role_arns", "arn", "ARNs of the IAM roles"),),
    ),
)
