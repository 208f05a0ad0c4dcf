"""Default values for required attributes a node did not supply."""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional

from .knowledge_base import KnowledgeBaseEntry, ResourceKind

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# Default listening port per database engine family.
DATABASE_ENGINE_PORTS: Dict[str, int] = {
    "postgres": 5432,
    "aurora-postgresql": 5432,
    "mysql": 3306,
    "mariadb": 3306,
    "aurora-mysql": 3306,
    "sqlserver": 1433,
    "oracle": 1521,
}

FALLBACK_DATABASE_PORT = 5432

ATTRIBUTE_DEFAULTS: Dict[str, Any] = {
    # compute
    "ami": "ami-0c55b159cbfafe1f0",
    "instance_type": "t3.micro",
    "ami_type": "amazon_linux",
    "associate_public_ip": False,
    "root_volume_size": 20,
    "ebs_volume_size": 100,
    # database
    "engine": "postgres",
    "instance_class": "db.t3.micro",
    "username": "admin",
    "password": "CHANGEME",
    "allocated_storage": 20,
    "db_name": "mydb",
    "backup_retention_period": 7,
    "backup_window": "03:00-04:00",
    "maintenance_window": "sun:04:00-sun:05:00",
    "skip_final_snapshot": False,
    "deletion_protection": True,
    "multi_az": False,
    "performance_insights_enabled": True,
    "performance_insights_retention_period": 7,
    "parameter_group_family": "postgres15",
    "major_engine_version": "15",
    "billing_mode": "PAY_PER_REQUEST",
    "hash_key": "id",
    "hash_key_type": "S",
    "point_in_time_recovery": True,
    # storage
    "versioning_status": "Enabled",
    "force_destroy": False,
    "sse_algorithm": "AES256",
    # functions
    "filename": "lambda_function.zip",
    "handler": "index.handler",
    "runtime": "python3.13",
    "timeout": 30,
    "memory_size": 128,
    "tracing_mode": "Active",
    "reserved_concurrent_executions": -1,
    # identity
    "assume_role_action": "sts:AssumeRole",
    "assume_role_service": "ec2.amazonaws.com",
    # network
    "cidr_block": "10.0.0.0/16",
    "enable_dns_hostnames": True,
    "enable_dns_support": True,
    "map_public_ip_on_launch": False,
    "revoke_rules_on_delete": True,
    "internal": False,
    "load_balancer_type": "application",
    "listener_port": 80,
    "target_port": 80,
    "health_check_path": "/",
    # messaging
    "visibility_timeout_seconds": 30,
    "message_retention_seconds": 345600,
}

# Kind-specific values that win over ATTRIBUTE_DEFAULTS.
KIND_OVERRIDES: Dict[ResourceKind, Dict[str, Any]] = {
    ResourceKind.SUBNET: {"cidr_block": "10.0.10.0/24"},
}


def database_port(engine: Optional[str], fallback: int = FALLBACK_DATABASE_PORT) -> int:
    """Return the default port of a database engine.

    Args:
        engine: Engine name such as "postgres" or "mysql"; version suffixes
            like "postgres15" are tolerated
        fallback: Port used when the engine is unknown

    Returns:
        Port number
    """
    if not engine:
        return fallback
    name = str(engine).lower()
    if name in DATABASE_ENGINE_PORTS:
        return DATABASE_ENGINE_PORTS[name]
    for family, port in DATABASE_ENGINE_PORTS.items():
        if name.startswith(family):
            return port
    return fallback


def _dns_label(resource_name: str) -> str:
    """Resource identifier as a lowercase, hyphenated cloud name."""
    label = re.sub(r"[^a-z0-9]+", "-", resource_name.lower()).strip("-")
    return label or "resource"


def _lb_name(resource_name: str, now: datetime) -> str:
    # Load balancer names are limited to 32 characters.
    return _dns_label(resource_name)[:32].rstrip("-")


def _bucket_name(resource_name: str, now: datetime) -> str:
    epoch_ms = int(now.timestamp() * 1000)
    return f"{_dns_label(resource_name)}-bucket-{epoch_ms}"


_GENERATED: Dict[str, Callable[[str, datetime], Any]] = {
    "bucket": _bucket_name,
    "identifier": lambda name, now: _dns_label(name),
    "function_name": lambda name, now: name,
    "role_name": lambda name, now: name,
    "table_name": lambda name, now: name,
    "queue_name": lambda name, now: name,
    "topic_name": lambda name, now: name,
    "lb_name": _lb_name,
    "description": lambda name, now: f"Managed by CloudCanvas for {name}",
}


class DefaultSynthesizer:
    """Fills missing required attributes with kind-appropriate defaults."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        """Initialize the synthesizer.

        Args:
            clock: Source of the current instant; defaults to UTC now
        """
        self.clock = clock or utc_now

    def fill_defaults(
        self,
        entry: KnowledgeBaseEntry,
        supplied: Mapping[str, Any],
        resource_name: str,
    ) -> Dict[str, Any]:
        """Merge supplied attributes with defaults for missing required ones.

        A supplied value of None counts as missing. Attributes that are not
        required are passed through untouched.

        Args:
            entry: Matched knowledge base entry
            supplied: Attributes from the node
            resource_name: Derived Terraform identifier of the node

        Returns:
            New mapping holding every required attribute
        """
        merged: Dict[str, Any] = dict(supplied)
        now: Optional[datetime] = None
        overrides = KIND_OVERRIDES.get(entry.kind, {})

        for attribute in entry.required_attributes:
            if merged.get(attribute) is not None:
                continue

            if attribute in overrides:
                value = overrides[attribute]
            elif attribute == "port" and entry.kind is ResourceKind.DB_INSTANCE:
                value = database_port(merged.get("engine"))
            elif attribute in ATTRIBUTE_DEFAULTS:
                value = ATTRIBUTE_DEFAULTS[attribute]
            elif attribute in _GENERATED:
                if now is None:
                    now = self.clock()
                value = _GENERATED[attribute](resource_name, now)
            else:
                value = ""

            merged[attribute] = value
            logger.debug(
                f"Defaulted {entry.kind.value}.{attribute} for {resource_name}: {value!r}"
            )

        return merged


def fill_defaults(
    entry: KnowledgeBaseEntry,
    supplied: Mapping[str, Any],
    resource_name: str,
    clock: Optional[Clock] = None,
) -> Dict[str, Any]:
    """Functional wrapper around DefaultSynthesizer.fill_defaults()."""
    return DefaultSynthesizer(clock).fill_defaults(entry, supplied, resource_name)
