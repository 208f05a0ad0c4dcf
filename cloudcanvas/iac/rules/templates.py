"""Templates for fragments produced from edges."""

INGRESS_RULE_TEMPLATE = """resource "aws_security_group_rule" "{{rule_name}}" {
  type                     = "ingress"
  from_port                = {{port}}
  to_port                  = {{port}}
  protocol                 = "tcp"
  security_group_id        = aws_security_group.{{target}}_sg.id
  source_security_group_id = aws_security_group.{{source}}_sg.id
  description              = "{{description}}"
}
"""

DEFERRED_CONNECTION_TEMPLATE = """# Connection from {{source}} to {{target}} - Manual configuration may be needed
# Connection type: {{source_kind}} -> {{target_kind}}
"""
