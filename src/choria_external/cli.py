"""Command-line interface for running external agents and discovery sources."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Sequence

from common import ConfigError, Settings, configure_logging

from .bootstrap import DEFAULT_AGENT_MODULE, load_agent, load_discovery
from .errors import FactsError
from .facts import load_facts
from .runner import execute


def create_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Choria external agent runner")
    parser.add_argument(
        "--env-file",
        action="append",
        default=None,
        help="Path to a .env file supplying CHORIA_EXTERNAL_* values missing from the environment. Can be provided multiple times.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log dispatch decisions to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    agent_parser = subparsers.add_parser("agent", help="Answer an activation check or RPC request")
    agent_parser.add_argument(
        "--module",
        default=DEFAULT_AGENT_MODULE,
        help=f"Module exposing build_agent(settings) (default: {DEFAULT_AGENT_MODULE})",
    )
    agent_parser.set_defaults(handler=_handle_agent)

    discover_parser = subparsers.add_parser("discover", help="Answer a discovery request")
    discover_parser.add_argument(
        "--module",
        required=True,
        help="Module exposing build_discovery(settings)",
    )
    discover_parser.set_defaults(handler=_handle_discover)

    facts_parser = subparsers.add_parser("facts", help="Print the node facts passed by the orchestrator")
    facts_parser.set_defaults(handler=_handle_facts)

    return parser


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Entry point for handling CLI execution."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)
    settings = Settings.from_env(env_files=args.env_file)

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.error("No handler configured for the provided command")
    return handler(args, settings)


def _handle_agent(args: argparse.Namespace, settings: Settings) -> int:
    try:
        agent = load_agent(args.module, settings)
    except (ImportError, ValueError, ConfigError) as exc:
        print(f"Could not load agent: {exc}", file=sys.stderr)
        return 1
    return execute(agent)


def _handle_discover(args: argparse.Namespace, settings: Settings) -> int:
    try:
        discovery = load_discovery(args.module, settings)
    except (ImportError, ValueError) as exc:
        print(f"Could not load discovery source: {exc}", file=sys.stderr)
        return 1
    return execute(discovery)


def _handle_facts(args: argparse.Namespace, settings: Settings) -> int:
    try:
        facts = load_facts(settings)
    except FactsError as exc:
        print(exc, file=sys.stderr)
        return 1
    print(json.dumps(facts, indent=2, sort_keys=True))
    return 0
