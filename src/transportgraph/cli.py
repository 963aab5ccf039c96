"""
TransportGraph CLI — Command-line interface for core-path analysis.

Commands:
  primary   — Shortest route(s) from an NE to the core
  via       — Route to the core forced through one LLDP neighbor
  converge  — Convergence point of several NEs
  lookup    — Find NEs by name fragment, Site ID or Site DEPS
  serve     — Start the REST API
"""

import json
import logging
import sys

import click

from . import __version__
from .config import get_config
from .exceptions import TransportGraphError


@click.group()
@click.version_option(version=__version__, prog_name="transportgraph")
@click.option("--inventory", "-i", default=None, help="Inventory CSV file or URL")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, inventory, verbose):
    """TransportGraph — Transport Network Core-Path Analysis."""
    config = get_config()
    if inventory:
        config.inventory.source = inventory
    config.verbose = config.verbose or verbose
    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


def _analyzer(ctx):
    from .analysis.analyzer import TopologyAnalyzer
    from .ingest.inventory import InventoryLoader

    return TopologyAnalyzer(InventoryLoader(ctx.obj["config"].inventory))


def _run(func, *args):
    try:
        return func(*args)
    except TransportGraphError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _save(data, output):
    if output:
        with open(output, "w") as f:
            json.dump(data, f, indent=2)
        click.echo(f"Saved to {output}")


def _echo_topology(topo):
    if topo["noCore"]:
        click.echo("  No core reachable")
    for node in sorted(topo["nodes"], key=lambda n: (n["level"] is None, n["level"] or 0)):
        click.echo(f"  [{node['level']}] {node['id']} ({node['type']})")
    click.echo(f"  Links: {len(topo['edges'])}")


@cli.command()
@click.argument("target")
@click.option("--output", "-o", default=None, help="Save result to JSON")
@click.pass_context
def primary(ctx, target, output):
    """Show the shortest route(s) from TARGET to the core."""
    result = _run(_analyzer(ctx).analyze_primary, target)

    click.echo(f"\n--- Path to Core: {target} ---")
    _echo_topology(result["topo"])
    click.echo(f"  LLDP neighbors: {', '.join(result['neighbors']) or '-'}")
    _save(result, output)


@cli.command()
@click.argument("target")
@click.argument("next_hop")
@click.option("--output", "-o", default=None, help="Save result to JSON")
@click.pass_context
def via(ctx, target, next_hop, output):
    """Route TARGET to the core leaving through neighbor NEXT_HOP."""
    topo = _run(_analyzer(ctx).analyze_via, target, next_hop)

    click.echo(f"\n--- Path to Core: {target} via {next_hop} ---")
    _echo_topology(topo)
    _save(topo, output)


@cli.command()
@click.argument("names", nargs=-1, required=True)
@click.option("--output", "-o", default=None, help="Save result to JSON")
@click.pass_context
def converge(ctx, names, output):
    """Find where the core paths of several NEs converge."""
    result = _run(_analyzer(ctx).analyze_convergence, list(names))

    click.echo("\n--- Convergence Analysis ---")
    click.echo(f"Resolved: {', '.join(result['resolved']) or '-'}")
    if result["convergence"] is None:
        click.echo("No convergence point found.")
    else:
        click.echo(f"Convergence: {result['convergence']}")
        for node in result["graph"]["nodes"]:
            tags = [t for t in ("source", "convergence") if node[t]]
            suffix = f" <{', '.join(tags)}>" if tags else ""
            click.echo(f"  [{node['level']}] {node['id']} ({node['type']}){suffix}")
    _save(result, output)


@cli.command()
@click.argument("query")
@click.pass_context
def lookup(ctx, query):
    """Find NEs by name fragment, Site ID or Site DEPS."""
    matches = _run(_analyzer(ctx).lookup, query)
    if not matches:
        click.echo("No matching NE.")
    for name in matches:
        click.echo(name)


@cli.command()
@click.option("--host", default=None, help="API host")
@click.option("--port", "-p", default=None, type=int, help="API port")
@click.pass_context
def serve(ctx, host, port):
    """Start the REST API."""
    from .api.routes import run_api

    config = ctx.obj["config"]
    host = host or config.api.host
    port = port or config.api.port
    click.echo(f"Starting TransportGraph API on {host}:{port}")
    run_api(_analyzer(ctx), host=host, port=port, debug=config.verbose)


if __name__ == "__main__":
    cli()
