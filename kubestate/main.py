"""
kubestate CLI - main entry point.

Typer-based CLI for listing and collecting Kubernetes state metrics.
Commands: metrics, collect, policy, version
"""

import logging
import sys
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import config
from .errors import KubestateError
from .models import LAYOUTS, Kind, Metric, kind_of
from .namespace import is_valid_part
from .runtime import Kubestate
from .utils import format_metric, write_json

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="kubestate",
    help="kubestate - Kubernetes state metrics collector",
    add_completion=False,
)

console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


@app.command()
def metrics():
    """List every metric type the collector supports."""
    table = Table(title="Metric Types", show_header=True, header_style="bold magenta")
    table.add_column("Namespace", style="cyan")
    table.add_column("Unit", style="yellow")
    table.add_column("Description")

    for mt in Kubestate().get_metric_types():
        table.add_row(mt.namespace.key(), mt.unit, mt.description)

    console.print(table)


@app.command()
def collect(
    incluster: bool = typer.Option(
        config.DEFAULT_INCLUSTER,
        "--incluster/--no-incluster",
        help="Use in-cluster service account credentials",
    ),
    kubeconfig: str = typer.Option(
        config.DEFAULT_KUBECONFIG,
        "--kubeconfig",
        "-k",
        help="Path to kubeconfig file (used with --no-incluster)",
    ),
    namespace: Optional[str] = typer.Option(
        None, "--namespace", "-n", help="Only collect objects in this namespace"
    ),
    node: Optional[str] = typer.Option(
        None, "--node", help="Only collect objects on this node"
    ),
    kinds: Optional[List[Kind]] = typer.Option(
        None, "--kind", help="Restrict to these kinds (repeatable)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print measurements as JSON"),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Also write measurements to this JSON file"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging (DEBUG level)"
    ),
):
    """
    Collect metrics from the configured cluster.

    Requests the full catalog (optionally narrowed by kind) with the
    namespace and node slots bound to the given selectors, and prints one
    measurement per line.
    """
    _setup_logging(verbose)

    for option, value in (("--namespace", namespace), ("--node", node)):
        if value and not is_valid_part(value):
            console.print(
                f"\n❌ [bold red]Error:[/bold red] {option} {escape(repr(value))} contains characters "
                "that cannot appear in a metric namespace; omit it to collect every "
                "object and filter the output instead\n",
                style="red",
                highlight=False,
            )
            raise typer.Exit(code=1)

    collector = Kubestate()
    requested = build_requests(
        collector.get_metric_types(),
        kinds=kinds,
        namespace=namespace,
        node=node,
        cfg={"incluster": incluster, "kubeconfigpath": kubeconfig},
    )

    try:
        measurements = collector.collect_metrics(requested)
    except KubestateError as e:
        console.print(f"\n❌ [bold red]Error:[/bold red] {e}\n", style="red")
        logger.error(f"Collection failed: {e}", exc_info=verbose)
        raise typer.Exit(code=1)

    if output:
        path = write_json([m.model_dump(mode="json") for m in measurements], output)
        logger.info(f"Wrote {len(measurements)} measurements to {path}")

    if as_json:
        for m in measurements:
            console.print_json(m.model_dump_json())
    else:
        for m in measurements:
            console.print(format_metric(m), markup=False, highlight=False, soft_wrap=True)


@app.command()
def policy():
    """Show the config keys accepted on requested metrics."""
    table = Table(title="Config Policy", show_header=True, header_style="bold magenta")
    table.add_column("Prefix", style="cyan")
    table.add_column("Key", style="yellow")
    table.add_column("Type")
    table.add_column("Required")
    table.add_column("Default")

    for rule in Kubestate().get_config_policy().rules:
        table.add_row(
            ".".join(rule.prefix), rule.key, rule.type, str(rule.required), str(rule.default)
        )

    console.print(table)


@app.command()
def version():
    """Show version information."""
    from . import __version__
    console.print(f"kubestate version [cyan]{__version__}[/cyan]")


def build_requests(
    mts: List[Metric],
    kinds: Optional[List[Kind]] = None,
    namespace: Optional[str] = None,
    node: Optional[str] = None,
    cfg: Optional[dict] = None,
) -> List[Metric]:
    """
    Narrow catalog metric types into a request.

    Keeps only *kinds* (all when empty), binds the namespace and node slots
    where the kind has them, and attaches *cfg* to every request.
    """
    wanted = set(kinds or [])
    requested = []

    for mt in mts:
        ns = mt.namespace.strings()
        kind = kind_of(ns)
        if kind is None or (wanted and kind not in wanted):
            continue

        layout = LAYOUTS[kind]
        if namespace and layout.namespace is not None:
            ns[layout.namespace] = namespace
        if node and layout.node is not None:
            ns[layout.node] = node

        requested.append(mt.model_copy(update={
            "namespace": mt.namespace.with_values(ns),
            "config": dict(cfg or {}),
        }))

    return requested


if __name__ == "__main__":
    app()
