"""Command line interface for Cloud Canvas."""

import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click

from .config import ConfigError, load_config
from .exceptions import CloudCanvasError
from .iac.engine import TerraformGenerationEngine
from .iac.knowledge_base import aliases_for, get_knowledge_base
from .logging_config import configure_logging
from .models import load_graph


@click.group()
@click.option(
    "--log-level",
    default="WARNING",
    help="Logging level (DEBUG, INFO, WARNING, ERROR)",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str) -> None:
    """Cloud Canvas - generate Terraform from infrastructure diagrams."""
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level.upper()
    configure_logging(log_level)


@cli.command()
@click.argument("graph_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory the Terraform file is written to",
)
@click.option("--stdout", "to_stdout", is_flag=True, help="Print the document instead of writing it")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML configuration file",
)
@click.option(
    "--unique-identifiers",
    is_flag=True,
    help="Suffix duplicate resource identifiers (_2, _3, ...)",
)
@click.option(
    "--save-project",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write the graph with its generated text as a project JSON file",
)
@click.option("--report/--no-report", default=True, help="Print a generation report to stderr")
def generate(
    graph_file: Path,
    output_dir: Path,
    to_stdout: bool,
    config_file: Optional[Path],
    unique_identifiers: bool,
    save_project: Optional[Path],
    report: bool,
) -> None:
    """Generate main.tf from a JSON or YAML diagram file.

    The file holds a mapping with "nodes" and "edges" lists, the same shape
    the editor saves:

    \b
      cloudcanvas generate diagram.json --output infra/
      cloudcanvas generate diagram.yaml --stdout
    """
    overrides: Dict[str, Any] = {}
    if unique_identifiers:
        overrides["unique_identifiers"] = unique_identifiers

    try:
        config = load_config(config_file, overrides)
        graph = load_graph(graph_file)
    except (ConfigError, CloudCanvasError) as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    engine = TerraformGenerationEngine(config=config)
    result = engine.generate_graph(graph)

    output_path = None
    if to_stdout:
        click.echo(result.document, nl=False)
    else:
        output_path = engine.export(result, output_dir)
        click.echo(f"✅ Terraform written to {output_path}")

    if save_project:
        project = graph.model_copy(update={"generated_text": result.document})
        if graph.name is None:
            project = project.model_copy(update={"name": graph_file.stem})
        save_project.parent.mkdir(parents=True, exist_ok=True)
        with open(save_project, "w", encoding="utf-8") as f:
            json.dump(project.to_project_dict(), f, indent=2)
        click.echo(f"✅ Project saved to {save_project}", err=to_stdout)

    if report:
        click.echo(engine.build_report(result, output_path).format_report(), err=True)


@cli.command()
def kinds() -> None:
    """List supported resource kinds and the aliases that resolve to them."""
    knowledge_base = get_knowledge_base()
    for kind in knowledge_base.keys():
        entry = knowledge_base.lookup(kind)
        aliases = ", ".join(aliases_for(kind)) or "-"
        click.echo(f"{kind.value:<22} {entry.category:<12} {aliases}")


@cli.command()
@click.argument("kind")
def examples(kind: str) -> None:
    """Print example configurations for KIND (kinds and aliases accepted)."""
    found = get_knowledge_base().examples_for(kind)
    if not found:
        click.echo(f"❌ No knowledge base entry matches '{kind}'", err=True)
        sys.exit(1)
    click.echo("\n\n".join(found))


@cli.command()
@click.argument("kind")
def advisories(kind: str) -> None:
    """Print best-practice advisories for KIND (kinds and aliases accepted)."""
    found = get_knowledge_base().advisories_for(kind)
    if not found:
        click.echo(f"❌ No knowledge base entry matches '{kind}'", err=True)
        sys.exit(1)
    for advisory in found:
        click.echo(f"- {advisory}")


@cli.command("init-config")
@click.argument(
    "path",
    type=click.Path(dir_okay=False, path_type=Path),
    required=False,
)
def init_config(path: Optional[Path]) -> None:
    """Write the default configuration to PATH (default: ~/.config/cloudcanvas/config.yaml)."""
    from .config import ConfigLoader, create_default_config

    target = path or ConfigLoader.DEFAULT_CONFIG_FILE
    create_default_config(target)
    click.echo(f"✅ Default configuration written to {target}")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
