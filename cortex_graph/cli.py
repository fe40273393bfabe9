"""
Cortex Graph CLI

Simple command-line interface for querying a Cortex Graph service.

Usage:
    python -m cortex_graph.cli neurons --tag-contains cat --limit 10
    python -m cortex_graph.cli neuron <id> --central <central-id> --relative-type Presynaptic
    python -m cortex_graph.cli terminals --presynaptic <neuron-id>
    python -m cortex_graph.cli terminal <id>
    python -m cortex_graph.cli neurons --query-file saved_query.yaml
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

import yaml

from .core import (
    Config,
    CortexGraphError,
    NeuronGraphQueryClient,
    NeuronQuery,
    QueryResult,
    RelativeType,
)

logger = logging.getLogger(__name__)

FILTER_OPTIONS = (
    ("--id", "id"),
    ("--id-not", "id_not"),
    ("--tag-contains", "tag_contains"),
    ("--tag-contains-not", "tag_contains_not"),
    ("--presynaptic", "presynaptic"),
    ("--presynaptic-not", "presynaptic_not"),
    ("--postsynaptic", "postsynaptic"),
    ("--postsynaptic-not", "postsynaptic_not"),
)


def load_query_file(path: str) -> NeuronQuery:
    """Load a saved NeuronQuery from YAML (wire or snake_case keys)."""
    query_path = Path(path)
    if not query_path.exists():
        raise CortexGraphError(f"Query file not found: {path}")

    with open(query_path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise CortexGraphError(f"Query file must contain a mapping: {path}")
    return NeuronQuery.from_dict(data)


def build_query(args: argparse.Namespace) -> NeuronQuery:
    """Merge --query-file with command-line filters; command-line values are appended."""
    query = load_query_file(args.query_file) if args.query_file else NeuronQuery()

    for _, attr in FILTER_OPTIONS:
        values = getattr(args, attr) or []
        if values:
            setattr(query, attr, getattr(query, attr) + list(values))

    if args.limit is not None:
        query.limit = args.limit

    # Re-run normalization (dedupe, limit check)
    return NeuronQuery(**{attr: getattr(query, attr) for _, attr in FILTER_OPTIONS}, limit=query.limit)


async def run_command(args: argparse.Namespace, client: NeuronGraphQueryClient) -> QueryResult:
    base_url = args.base_url
    query = build_query(args)
    relative_type = RelativeType.parse(args.relative_type)

    if args.command == "neuron":
        return await client.get_neuron_by_id(
            base_url, args.entity_id, query=query,
            central_id=args.central, relative_type=relative_type,
        )
    if args.command == "neurons":
        return await client.get_neurons(
            base_url, central_id=args.central, query=query, relative_type=relative_type,
        )
    if args.command == "terminal":
        return await client.get_terminal_by_id(base_url, args.entity_id, query=query)
    return await client.get_terminals(base_url, query=query)


def build_parser(config: Config) -> argparse.ArgumentParser:
    filters = argparse.ArgumentParser(add_help=False)
    for flag, attr in FILTER_OPTIONS:
        filters.add_argument(flag, dest=attr, action="append", metavar="VALUE",
                             help=f"{attr} filter (repeatable)")
    filters.add_argument("--limit", type=int, help="Maximum number of results")
    filters.add_argument("--query-file", help="YAML file with a saved query")

    parser = argparse.ArgumentParser(
        description="Cortex Graph query CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Neurons whose tag contains "cat"
    python -m cortex_graph.cli neurons --tag-contains cat --limit 10

    # Presynaptic relatives of a neuron
    python -m cortex_graph.cli neurons --central 1234 --relative-type Presynaptic

    # Single terminal
    python -m cortex_graph.cli terminal 5678
        """,
    )
    parser.add_argument(
        "--base-url",
        default=config.base_url,
        help=f"Service base URL (default: $CORTEX_GRAPH_BASE_URL or {config.base_url})",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    commands = parser.add_subparsers(dest="command", required=True)

    neuron = commands.add_parser("neuron", parents=[filters], help="Get a neuron by id")
    neuron.add_argument("entity_id", metavar="ID")
    neuron.add_argument("--central", help="Central neuron id (query as a relative)")
    neuron.add_argument("--relative-type", default="NotSet",
                        choices=[t.value for t in RelativeType])

    neurons = commands.add_parser("neurons", parents=[filters], help="Query neurons")
    neurons.add_argument("--central", help="Central neuron id (query its relatives)")
    neurons.add_argument("--relative-type", default="NotSet",
                         choices=[t.value for t in RelativeType])

    terminal = commands.add_parser("terminal", parents=[filters], help="Get a terminal by id")
    terminal.add_argument("entity_id", metavar="ID")

    commands.add_parser("terminals", parents=[filters], help="Query terminals")

    return parser


def main(argv=None, client: NeuronGraphQueryClient = None) -> int:
    try:
        config = Config.from_env()
    except CortexGraphError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    args = build_parser(config).parse_args(argv)
    for attr in ("central", "relative_type"):
        if not hasattr(args, attr):
            setattr(args, attr, None)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    client = client or NeuronGraphQueryClient.from_config(config)

    try:
        result = asyncio.run(run_command(args, client))
    except KeyboardInterrupt:
        print("\n👋 Cancelled", file=sys.stderr)
        return 130
    except Exception as e:
        logger.debug(f"Query failed: {type(e).__name__}", exc_info=e)
        print(f"❌ {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
