"""Tests for network rule inference from edges."""

import pytest

from cloudcanvas.config import GenerationConfig
from cloudcanvas.iac.emitters.terraform import TerraformEmitter
from cloudcanvas.iac.knowledge_base import ResourceKind
from cloudcanvas.iac.rules import (
    AccessRule,
    NetworkRuleInference,
    PairingRule,
    PairingRuleRegistry,
    pairing_rule,
)
from cloudcanvas.iac.rules.pairings import (
    BUILTIN_RULES,
    FunctionToDatabaseRule,
    FunctionToInstanceRule,
    InstanceToDatabaseRule,
    LoadBalancerToInstanceRule,
)
from cloudcanvas.models import Edge, Node


def infer(nodes, edges, config=None, clock=None):
    emitter = TerraformEmitter(clock=clock, config=config)
    context = emitter.build_context(nodes)
    emitter.emit(nodes, context)
    inference = NetworkRuleInference()
    return inference.infer_all(edges, context), inference


@pytest.fixture
def load_balancer_node():
    return Node(id="lb-1", label="Front Door", kind="aws_lb")


class TestRegistry:
    """Test suite for PairingRuleRegistry."""

    def test_builtin_rules_registered_in_order(self):
        """Test built-in rules are registered in dispatch order."""
        assert PairingRuleRegistry.get_all_rules() == list(BUILTIN_RULES)

    @pytest.mark.parametrize(
        "source,target,rule_class",
        [
            (ResourceKind.LAMBDA_FUNCTION, ResourceKind.INSTANCE, FunctionToInstanceRule),
            (ResourceKind.LAMBDA_FUNCTION, ResourceKind.DB_INSTANCE, FunctionToDatabaseRule),
            (ResourceKind.INSTANCE, ResourceKind.DB_INSTANCE, InstanceToDatabaseRule),
            (ResourceKind.LOAD_BALANCER, ResourceKind.INSTANCE, LoadBalancerToInstanceRule),
        ],
    )
    def test_get_rule(self, source, target, rule_class):
        """Test known pairings dispatch to their rule."""
        assert isinstance(PairingRuleRegistry.get_rule(source, target), rule_class)

    def test_unknown_pair(self):
        """Test unknown pairings return None."""
        assert PairingRuleRegistry.get_rule(ResourceKind.S3_BUCKET, ResourceKind.INSTANCE) is None
        assert PairingRuleRegistry.get_rule(ResourceKind.DB_INSTANCE, ResourceKind.INSTANCE) is None

    def test_register_is_idempotent(self):
        """Test registering twice keeps one entry."""
        PairingRuleRegistry.register(FunctionToInstanceRule)
        assert PairingRuleRegistry.get_all_rules().count(FunctionToInstanceRule) == 1

    def test_clear_and_reregister(self):
        """Test inference repopulates an empty registry."""
        PairingRuleRegistry.clear()
        assert PairingRuleRegistry.get_all_rules() == []

        NetworkRuleInference()
        assert PairingRuleRegistry.get_all_rules() == list(BUILTIN_RULES)

    def test_custom_rule(self, database_node):
        """Test additional rules can be registered with the decorator."""

        @pairing_rule
        class QueueToDatabaseRule(PairingRule):
            SOURCE_KINDS = frozenset({ResourceKind.SQS_QUEUE})
            TARGET_KINDS = frozenset({ResourceKind.DB_INSTANCE})

            def access_rules(self, source, target, context):
                return [AccessRule("_custom", 9999, "Custom")]

        queue = Node(id="q", label="Jobs", kind="aws_sqs_queue")
        fragments, _ = infer([queue, database_node], [Edge(source="q", target="db-1")])

        assert 'resource "aws_security_group_rule" "orders_db_from_jobs_custom"' in fragments[0].text
        assert "from_port                = 9999" in fragments[0].text


class TestPairings:
    """Test suite for the built-in pairings."""

    def test_function_to_instance(self, lambda_node, instance_node, vpc_node):
        """Test function to instance opens the application port."""
        fragments, _ = infer(
            [vpc_node, instance_node, lambda_node], [Edge(source="fn-1", target="ec2-1")]
        )
        text = fragments[0].text

        assert 'resource "aws_security_group_rule" "web_server_from_api_handler_ingress"' in text
        assert "from_port                = 8080" in text
        assert "security_group_id        = aws_security_group.web_server_sg.id" in text
        assert "source_security_group_id = aws_security_group.api_handler_sg.id" in text

    def test_function_to_database(self, lambda_node, database_node):
        """Test function to database opens application and database ports."""
        fragments, _ = infer([lambda_node, database_node], [Edge(source="fn-1", target="db-1")])
        text = fragments[0].text

        assert len(fragments) == 1
        assert '"orders_db_from_api_handler_ingress"' in text
        assert '"orders_db_from_api_handler_ingress_db"' in text
        assert "from_port                = 8080" in text
        assert "from_port                = 3306" in text

    def test_instance_to_database_uses_engine_port(self, instance_node, database_node):
        """Test the database port follows the engine."""
        fragments, _ = infer([instance_node, database_node], [Edge(source="ec2-1", target="db-1")])
        assert "to_port                  = 3306" in fragments[0].text

    def test_instance_to_database_uses_supplied_port(self, instance_node):
        """Test an explicit port attribute wins."""
        database = Node(id="db", label="Db", kind="aws_db_instance", attributes={"port": "6432"})
        fragments, _ = infer([instance_node, database], [Edge(source="ec2-1", target="db")])
        assert "to_port                  = 6432" in fragments[0].text

    def test_database_without_engine_defaults_to_postgres(self, instance_node):
        """Test a database with no engine gets 5432."""
        database = Node(id="db", label="Db", kind="rds")
        fragments, _ = infer([instance_node, database], [Edge(source="ec2-1", target="db")])
        assert "to_port                  = 5432" in fragments[0].text

    def test_load_balancer_to_instance(self, load_balancer_node, instance_node):
        """Test load balancer to instance opens the HTTP port."""
        fragments, _ = infer(
            [load_balancer_node, instance_node], [Edge(source="lb-1", target="ec2-1")]
        )
        text = fragments[0].text

        assert '"web_server_from_front_door_ingress"' in text
        assert "from_port                = 80" in text

    def test_ports_from_config(self, lambda_node, instance_node):
        """Test configured ports are used."""
        config = GenerationConfig.model_validate({"ports": {"application_port": 3000}})
        fragments, _ = infer(
            [lambda_node, instance_node], [Edge(source="fn-1", target="ec2-1")], config=config
        )
        assert "from_port                = 3000" in fragments[0].text


class TestDeferredAndIgnored:
    """Test suite for edges without a rule."""

    def test_unknown_pair_is_deferred(self, instance_node, vpc_node):
        """Test unknown pairings produce a manual-configuration comment."""
        fragments, inference = infer(
            [vpc_node, instance_node], [Edge(source="ec2-1", target="vpc-1")]
        )

        assert fragments[0].is_placeholder
        assert fragments[0].text == (
            "# Connection from web_server to main_vpc - Manual configuration may be needed\n"
            "# Connection type: aws_instance -> aws_vpc\n"
        )
        assert inference.stats["deferred_edges"] == 1

    def test_unrecognized_endpoint_uses_raw_kind(self, instance_node):
        """Test unrecognized endpoints are described by their raw kind."""
        widget = Node(id="w", label="Widget", kind="unknown_widget")
        fragments, _ = infer([instance_node, widget], [Edge(source="ec2-1", target="w")])
        assert "# Connection type: aws_instance -> unknown_widget" in fragments[0].text

    @pytest.mark.parametrize(
        "edge",
        [
            Edge(source="ec2-1", target="ghost"),
            Edge(source="ghost", target="ec2-1"),
            Edge(source="ghost", target="phantom"),
        ],
    )
    def test_dangling_edges_ignored(self, instance_node, edge):
        """Test edges with a missing endpoint produce nothing."""
        fragments, inference = infer([instance_node], [edge])

        assert fragments == []
        assert inference.stats["ignored_edges"] == 1

    def test_one_fragment_per_usable_edge(self, sample_nodes, sample_edges):
        """Test fragments follow edge input order."""
        fragments, inference = infer(sample_nodes, sample_edges)

        assert [f.origin for f in fragments] == ["ec2-1->db-1", "fn-1->ec2-1"]
        assert inference.stats["inferred_edges"] == 2

    def test_repeated_edge_emits_rules_once(self, instance_node, database_node):
        """Test a repeated (source, target) pair does not redeclare its rules."""
        edges = [Edge(source="ec2-1", target="db-1"), Edge(source="ec2-1", target="db-1")]
        fragments, inference = infer([instance_node, database_node], edges)

        assert len(fragments) == 1
        assert fragments[0].text.count('"orders_db_from_web_server_ingress"') == 1
        assert inference.stats["repeated_edges"] == 1
        assert inference.stats["inferred_edges"] == 1

    def test_reverse_edge_is_not_a_repeat(self, instance_node, database_node):
        """Test opposite directions are distinct pairs."""
        edges = [Edge(source="ec2-1", target="db-1"), Edge(source="db-1", target="ec2-1")]
        fragments, inference = infer([instance_node, database_node], edges)

        assert len(fragments) == 2
        assert inference.stats["repeated_edges"] == 0
