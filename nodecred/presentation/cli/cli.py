"""
CLI Module

Architectural Intent:
- Command-line interface for nodecred
- Delegates to the enricher via the composition root
- Supports --verbose/--debug flags for log level control
"""

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
import traceback

from nodecred.composition_root import create_container
from nodecred.domain.errors import InvalidNodeIdError, MalformedNodeError
from nodecred.infrastructure.config import load_config
from nodecred.infrastructure.inventory import InventoryError
from nodecred.infrastructure.logging import configure_logging

EXIT_NOT_FOUND = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nodecred",
        description="nodecred: credential-aware node metadata lookup",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output with tracebacks"
    )
    parser.add_argument(
        "--config", "-c", default=None, help="Path to nodecred.json"
    )
    parser.add_argument(
        "--inventory", "-i", default=None, help="Path to a JSON inventory file"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    get_parser = subparsers.add_parser(
        "get", help="Fetch a node and attach its login credentials"
    )
    get_parser.add_argument("node_id", help="Id of the node to look up")
    get_parser.add_argument(
        "--show-secrets", action="store_true", help="Print secrets unredacted"
    )

    subparsers.add_parser("list", help="List known nodes")
    subparsers.add_parser("keys", help="List cached key pair groups")

    return parser


async def async_main():
    parser = build_parser()
    args = parser.parse_args()

    config = load_config(args.config)
    if args.inventory:
        config = dataclasses.replace(
            config,
            inventory=dataclasses.replace(config.inventory, path=args.inventory),
        )

    # Configure logging based on flags
    if args.debug:
        configure_logging(level=logging.DEBUG, json_format=config.log_json)
    elif args.verbose:
        configure_logging(level=logging.INFO, json_format=config.log_json)
    else:
        try:
            configure_logging(level=config.log_level, json_format=config.log_json)
        except ValueError as e:
            print(f"[-] Configuration error: {e}")
            sys.exit(1)

    verbose = args.verbose or args.debug

    if args.command is None:
        parser.print_help()
        return

    try:
        container = create_container(config)
    except InventoryError as e:
        print(f"[-] Inventory error: {e}")
        sys.exit(1)
    except ValueError as e:
        print(f"[-] Configuration error: {e}")
        sys.exit(1)

    if args.command == "get":
        try:
            node = await container.enricher.fetch_and_enrich(args.node_id)
        except InvalidNodeIdError as e:
            print(f"[-] {e}")
            sys.exit(1)
        except MalformedNodeError as e:
            print(f"[-] {e}")
            if verbose:
                traceback.print_exc()
            sys.exit(1)
        except Exception as e:
            print(f"[-] Lookup Failed: {e}")
            if verbose:
                traceback.print_exc()
            sys.exit(1)

        if node is None:
            print(f"[-] Node {args.node_id} not found")
            sys.exit(EXIT_NOT_FOUND)

        print(json.dumps(node.to_dict(include_secrets=args.show_secrets), indent=2))
        return

    if args.command == "list":
        node_ids = container.vcloud_adapter.list_vapp_ids()
        if not node_ids:
            print("[*] No nodes in inventory.")
            return
        for node_id in node_ids:
            node = await container.vcloud_adapter.get_node_metadata(node_id)
            if node is None:
                continue
            print(f"{node.id}\t{node.name}\t{node.tag or '-'}\t{node.state.name}")
        return

    if args.command == "keys":
        keys = container.key_store.keys()
        if not keys:
            print("[*] No cached key pairs.")
            return
        for key in sorted(keys, key=str):
            material = container.key_store.get(key)
            if material is None:
                continue
            print(f"{key}\t{material.account}\t{material.fingerprint or '-'}")
        return


def main():
    asyncio.run(async_main())


if __name__ == "__main__":
    main()
