"""Tests for resolving free-form kind strings."""

import pytest

from cloudcanvas.iac.knowledge_base import KnowledgeBase, ResourceKind
from cloudcanvas.iac.knowledge_base.catalog import ALL_ENTRIES
from cloudcanvas.iac.matcher import ResourceMatcher, match


class TestExactMatch:
    """Test suite for exact knowledge base keys."""

    @pytest.mark.parametrize("kind", ResourceKind.supported())
    def test_every_key_matches_itself(self, kind):
        """Test exact keys resolve to themselves."""
        assert match(kind.value) is kind


class TestAliasMatch:
    """Test suite for editor aliases."""

    @pytest.mark.parametrize(
        "alias,expected",
        [
            ("network", ResourceKind.VPC),
            ("vpcgroup", ResourceKind.VPC),
            ("ec2", ResourceKind.INSTANCE),
            ("instance", ResourceKind.INSTANCE),
            ("managed-database", ResourceKind.DB_INSTANCE),
            ("rds", ResourceKind.DB_INSTANCE),
            ("object-storage", ResourceKind.S3_BUCKET),
            ("alb", ResourceKind.LOAD_BALANCER),
            ("function", ResourceKind.LAMBDA_FUNCTION),
        ],
    )
    def test_alias(self, alias, expected):
        """Test aliases resolve to their kind."""
        assert match(alias) is expected

    def test_alias_ignored_when_kind_missing_from_knowledge_base(self):
        """Test an alias only applies when its kind has an entry."""
        entries = [entry for entry in ALL_ENTRIES if entry.kind is not ResourceKind.DB_INSTANCE]
        matcher = ResourceMatcher(KnowledgeBase(entries))

        assert matcher.match("managed-database") is ResourceKind.UNRECOGNIZED


class TestFuzzyMatch:
    """Test suite for partial matches."""

    @pytest.mark.parametrize(
        "kind,expected",
        [
            ("aws_instance_large", ResourceKind.INSTANCE),
            ("aws_s3", ResourceKind.S3_BUCKET),
            ("aws_lambda", ResourceKind.LAMBDA_FUNCTION),
            ("aws_dynamodb", ResourceKind.DYNAMODB_TABLE),
            ("aws_security_group_rule", ResourceKind.SECURITY_GROUP),
        ],
    )
    def test_partial_kind(self, kind, expected):
        """Test containment in either direction resolves the kind."""
        assert match(kind) is expected

    def test_ties_broken_by_knowledge_base_order(self):
        """Test the earliest key wins when several match."""
        assert match("aws_vpc_subnet") is ResourceKind.VPC


class TestUnrecognized:
    """Test suite for kinds that match nothing."""

    @pytest.mark.parametrize("kind", ["unknown_widget", "aws", "widget", "", None])
    def test_unmatched(self, kind):
        """Test unmatched, empty and missing kinds are UNRECOGNIZED."""
        assert match(kind) is ResourceKind.UNRECOGNIZED
