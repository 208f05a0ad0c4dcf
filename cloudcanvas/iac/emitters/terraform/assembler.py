"""Document assembler: wraps fragments in provider boilerplate.

Layout of every document:

    header comment
    terraform {} block
    provider "aws" block
    variables
    resource fragments                      (omitted when there are none)
    networking rules from connections       (omitted when there are none)
    outputs                                 (omitted when there are none)

The boilerplate is always present, so an empty diagram still produces a
configuration that Terraform can load.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ....config import GenerationConfig
from ...knowledge_base import KnowledgeBase, ResourceKind, get_knowledge_base
from ...renderer import render
from .fragments import Fragment

logger = logging.getLogger(__name__)

HEADER_TEMPLATE = """# Terraform configuration generated by CloudCanvas
# Review generated defaults before running terraform apply.

terraform {
  required_version = "{{required_version}}"

  required_providers {
    aws = {
      source  = "{{provider_source}}"
      version = "{{provider_version}}"
    }
  }
}

provider "aws" {
  region = var.aws_region

  default_tags {
    tags = {
      Environment = var.environment
      Application = var.application_name
      ManagedBy   = "{{managed_by}}"
      Terraform   = "true"
    }
  }
}

# Variables
variable "environment" {
  description = "Environment name (dev, staging, prod)"
  type        = string
  default     = "{{environment}}"
}

variable "application_name" {
  description = "Application name used in tags and resource names"
  type        = string
  default     = "{{application_name}}"
}

variable "aws_region" {
  description = "AWS region to deploy into"
  type        = string
  default     = "{{aws_region}}"
}

variable "public_key" {
  description = "SSH public key for EC2 key pairs"
  type        = string
  default     = ""
}

variable "db_password" {
  description = "Master password for managed databases"
  type        = string
  sensitive   = true
}

variable "allowed_origins" {
  description = "Origins allowed by CORS configurations"
  type        = list(string)
  default     = {{allowed_origins}}
}

variable "vpc_id" {
  description = "Existing VPC for resources not placed inside a diagram VPC (null uses the default VPC)"
  type        = string
  default     = null
}

variable "vpc_cidr_block" {
  description = "CIDR block of the existing VPC"
  type        = string
  default     = "10.0.0.0/16"
}
"""

OUTPUT_TEMPLATE = """output "{{output_name}}" {
  description = "{{description}}"
  value       = [{{values}}]
}
"""

RESOURCES_SECTION = "# Resources"
NETWORKING_SECTION = "# Networking Resources based on Connections"
OUTPUTS_SECTION = "# Outputs"


class DocumentAssembler:
    """Concatenates fragments into one Terraform document."""

    def __init__(
        self,
        config: Optional[GenerationConfig] = None,
        knowledge_base: Optional[KnowledgeBase] = None,
    ) -> None:
        self.config = config or GenerationConfig()
        self.knowledge_base = knowledge_base or get_knowledge_base()

    def boilerplate(self) -> str:
        """Render the header, terraform, provider and variable blocks."""
        provider = self.config.provider
        variables = self.config.variables
        return render(
            HEADER_TEMPLATE,
            {
                "required_version": provider.terraform_required_version,
                "provider_source": provider.aws_provider_source,
                "provider_version": provider.aws_provider_version,
                "managed_by": provider.managed_by_tag,
                "environment": variables.environment,
                "application_name": variables.application_name,
                "aws_region": variables.aws_region,
                "allowed_origins": list(variables.allowed_origins),
            },
        )

    def build_outputs(self, emitted: Dict[ResourceKind, List[str]]) -> List[str]:
        """Render one output block per summary attribute of each emitted kind.

        Args:
            emitted: Emitted identifiers per kind, in emission order

        Returns:
            Output blocks in knowledge base order
        """
        blocks = []
        for kind in self.knowledge_base.keys():
            identifiers = emitted.get(kind)
            if not identifiers:
                continue
            entry = self.knowledge_base.lookup(kind)
            for output in entry.outputs:
                values = ", ".join(
                    f"{entry.terraform_type}.{identifier}.{output.attribute}"
                    for identifier in identifiers
                )
                blocks.append(
                    render(
                        OUTPUT_TEMPLATE,
                        {
                            "output_name": output.name,
                            "description": output.description,
                            "values": values,
                        },
                    )
                )
        return blocks

    def assemble(
        self,
        node_fragments: Sequence[Fragment],
        rule_fragments: Sequence[Fragment] = (),
        outputs: Sequence[str] = (),
    ) -> str:
        """Build the final document.

        Args:
            node_fragments: Fragments from the emitter, in emission order
            rule_fragments: Fragments from network rule inference
            outputs: Output blocks from build_outputs()

        Returns:
            Newline-terminated Terraform document
        """
        sections = [self.boilerplate()]

        if node_fragments:
            sections.append(self._section(RESOURCES_SECTION, [f.text for f in node_fragments]))
        if rule_fragments:
            sections.append(self._section(NETWORKING_SECTION, [f.text for f in rule_fragments]))
        if outputs:
            sections.append(self._section(OUTPUTS_SECTION, list(outputs)))

        document = "\n".join(sections)
        if not document.endswith("\n"):
            document += "\n"

        logger.debug(
            f"Assembled document: {len(node_fragments)} node fragments, "
            f"{len(rule_fragments)} rule fragments, {len(outputs)} outputs"
        )
        return document

    @staticmethod
    def _section(title: str, parts: List[str]) -> str:
        body = "\n".join(part if part.endswith("\n") else part + "\n" for part in parts)
        return f"{title}\n\n{body}"


def write(document: str, output_dir: Path, filename: str = "main.tf") -> Path:
    """Write a document to ``output_dir/filename``.

    Args:
        document: Terraform text
        output_dir: Directory to write into (created if missing)
        filename: Target filename

    Returns:
        Path of the written file
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / filename

    with open(output_file, "w", encoding="utf-8") as f:
        f.write(document)

    logger.info(f"Terraform configuration written to {output_file}")
    return output_file
