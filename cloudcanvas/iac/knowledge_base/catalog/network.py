"""Network catalog entries: VPC, subnet and load balancer."""

from ..entry import KnowledgeBaseEntry, OutputSpec
from ..kinds import ResourceKind

VPC_TEMPLATE = """# VPC: {{label}}
resource "aws_vpc" "{{name}}" {
  cidr_block           = "{{cidr_block}}"
  enable_dns_hostnames = {{enable_dns_hostnames}}
  enable_dns_support   = {{enable_dns_support}}
{{#instance_tenancy}}  instance_tenancy     = "{{instance_tenancy}}"
{{/instance_tenancy}}
  tags = {
    Name        = "{{label}}"
    Environment = var.environment
  }
}

data "aws_availability_zones" "{{name}}_azs" {
  state = "available"
}

resource "aws_subnet" "{{name}}_subnet" {
  count                   = 2
  vpc_id                  = aws_vpc.{{name}}.id
  cidr_block              = cidrsubnet(aws_vpc.{{name}}.cidr_block, 8, count.index)
  availability_zone       = data.aws_availability_zones.{{name}}_azs.names[count.index]
  map_public_ip_on_launch = false

  tags = {
    Name        = "{{label}} subnet ${count.index + 1}"
    Environment = var.environment
  }
}
{{#internet_gateway}}
resource "aws_internet_gateway" "{{name}}_igw" {
  vpc_id = aws_vpc.{{name}}.id

  tags = {
    Name        = "{{label}} gateway"
    Environment = var.environment
  }
}
{{/internet_gateway}}"""

SUBNET_TEMPLATE = """# Subnet: {{label}}
resource "aws_subnet" "{{name}}" {
{{#container_name}}  vpc_id                  = aws_vpc.{{container_name}}.id
{{/container_name}}{{#standalone}}  vpc_id                  = var.vpc_id
{{/standalone}}  cidr_block              = "{{cidr_block}}"
  map_public_ip_on_launch = {{map_public_ip_on_launch}}
{{#availability_zone}}  availability_zone       = "{{availability_zone}}"
{{/availability_zone}}
  tags = {
    Name        = "{{label}}"
    Environment = var.environment
  }
}"""

LOAD_BALANCER_TEMPLATE = """# Load Balancer: {{label}}
{{#standalone}}data "aws_vpc" "{{name}}_vpc" {
  default = var.vpc_id == null
  id      = var.vpc_id
}

data "aws_subnets" "{{name}}_subnets" {
  filter {
    name   = "vpc-id"
    values = [data.aws_vpc.{{name}}_vpc.id]
  }
}

{{/standalone}}resource "aws_security_group" "{{name}}_sg" {
  name_prefix = "{{name}}-sg-"
  description = "Security group for {{label}}"
{{#container_name}}  vpc_id      = aws_vpc.{{container_name}}.id
{{/container_name}}{{#standalone}}  vpc_id      = data.aws_vpc.{{name}}_vpc.id
{{/standalone}}
  tags = {
    Name        = "{{label}} security group"
    Environment = var.environment
  }
}

resource "aws_security_group_rule" "{{name}}_listener_ingress" {
  type              = "ingress"
  from_port         = {{listener_port}}
  to_port           = {{listener_port}}
  protocol          = "tcp"
  cidr_blocks       = ["0.0.0.0/0"]
  security_group_id = aws_security_group.{{name}}_sg.id
  description       = "Listener traffic"
}

resource "aws_security_group_rule" "{{name}}_sg_egress" {
  type              = "egress"
  from_port         = 0
  to_port           = 0
  protocol          = "-1"
  cidr_blocks       = ["0.0.0.0/0"]
  security_group_id = aws_security_group.{{name}}_sg.id
}

resource "aws_lb" "{{name}}" {
  name               = "{{lb_name}}"
  internal           = {{internal}}
  load_balancer_type = "{{load_balancer_type}}"
  security_groups    = [aws_security_group.{{name}}_sg.id]
{{#container_name}}  subnets            = aws_subnet.{{container_name}}_subnet[*].id
{{/container_name}}{{#standalone}}  subnets            = data.aws_subnets.{{name}}_subnets.ids
{{/standalone}}
  drop_invalid_header_fields = true

  tags = {
    Name        = "{{label}}"
    Environment = var.environment
  }
}

resource "aws_lb_target_group" "{{name}}_tg" {
  port     = {{target_port}}
  protocol = "HTTP"
{{#container_name}}  vpc_id   = aws_vpc.{{container_name}}.id
{{/container_name}}{{#standalone}}  vpc_id   = data.aws_vpc.{{name}}_vpc.id
{{/standalone}}
  health_check {
    path    = "{{health_check_path}}"
    matcher = "200-399"
  }
}

resource "aws_lb_listener" "{{name}}_listener" {
  load_balancer_arn = aws_lb.{{name}}.arn
  port              = {{listener_port}}
  protocol          = "HTTP"

  default_action {
    type             = "forward"
    target_group_arn = aws_lb_target_group.{{name}}_tg.arn
  }
}"""

ENTRIES = (
    KnowledgeBaseEntry(
        kind=ResourceKind.VPC,
        category="network",
        template=VPC_TEMPLATE,
        required_attributes=("cidr_block", "enable_dns_hostnames", "enable_dns_support"),
        optional_attributes=("instance_tenancy", "internet_gateway"),
        examples=(
            """resource "aws_vpc" "main" {
  cidr_block           = "10.0.0.0/16"
  enable_dns_hostnames = true
  enable_dns_support   = true

  tags = {
    Name        = "${var.environment}-${var.application_name}-vpc"
    Environment = var.environment
  }
}""",
        ),
        advisories=(
            "Use dedicated subnets for different purposes",
            "Implement NAT gateways for private subnets",
            "Implement VPC flow logs for security monitoring",
            "Create VPC endpoints to avoid NAT for service traffic",
            "Use multiple AZs for high availability",
        ),
        outputs=(OutputSpec("vpc_ids", "id", "IDs of the VPCs"),),
    ),
    KnowledgeBaseEntry(
        kind=ResourceKind.SUBNET,
        category="network",
        template=SUBNET_TEMPLATE,
        required_attributes=("cidr_block", "map_public_ip_on_launch"),
        optional_attributes=("availability_zone",),
        examples=(
            """resource "aws_subnet" "private_a" {
  vpc_id            = aws_vpc.main.id
  cidr_block        = "10.0.10.0/24"
  availability_zone = "us-east-1a"
}""",
        ),
        advisories=(
            "Keep public and private subnets separate",
            "Do not map public IPs on launch for private subnets",
            "Spread subnets across availability zones",
        ),
        outputs=(OutputSpec("subnet_ids", "id", "IDs of the subnets"),),
    ),
    KnowledgeBaseEntry(
        kind=ResourceKind.LOAD_BALANCER,
        category="network",
        template=LOAD_BALANCER_TEMPLATE,
        required_attributes=(
            "lb_name",
            "internal",
            "load_balancer_type",
            "listener_port",
            "target_port",
            "health_check_path",
        ),
        examples=(
            """resource "aws_lb" "web" {
  name               = "web-alb"
  internal           = false
  load_balancer_type = "application"
  security_groups    = [aws_security_group.web_alb.id]
  subnets            = aws_subnet.public[*].id
}""",
        ),
        advisories=(
            "Terminate TLS at the load balancer with an ACM certificate",
            "Drop invalid HTTP header fields",
            "Enable access logs to an S3 bucket",
            "Place the load balancer in at least two availability zones",
        ),
        outputs=(OutputSpec("lb_dns_names", "dns_name", "DNS names of the load balancers"),),
    ),
)
