#!/usr/bin/env python3
"""
Command line entry point for the BigID generator.
Generates, decodes and visualizes IDs, runs the fleet simulator, or
starts the HTTP service.
"""

import sys
import logging
import argparse

from tabulate import tabulate

from bigid import config
from bigid.bigid_generator import BigIDGenerator, decode
from bigid.bigid_simulator import FleetSimulator
from bigid.bigid_visualizer import visualize_binary
from bigid.models import BigID, ParseError, ShardIDError

logger = logging.getLogger(__name__)

DECODED_HEADERS = ["ID", "Version", "Reserved", "Timestamp", "Shard ID", "Sequence", "Create Time"]


def print_header(title):
    """Print a section header.

    Args:
        title (str): The title to print
    """
    width = 80
    print("\n" + "=" * width)
    print(f"{title:^{width}}")
    print("=" * width + "\n")


def _decoded_row(big_id, decoded):
    return [
        big_id,
        decoded.version,
        decoded.reserved,
        decoded.timestamp,
        decoded.shard_id,
        decoded.sequence,
        decoded.create_time,
    ]


def run_generate(shard_id, count, strict):
    """Generate IDs and print them with their decoded fields."""
    generator = BigIDGenerator(strict=strict)
    rows = []
    for _ in range(count):
        big_id = generator.generate(shard_id)
        rows.append(_decoded_row(big_id, generator.decode(big_id)))
    print(tabulate(rows, headers=DECODED_HEADERS, tablefmt="grid"))


def run_decode(values):
    """Decode IDs given as decimal strings."""
    rows = []
    for value in values:
        big_id = BigID.parse(value)
        rows.append(_decoded_row(big_id, decode(big_id)))
    print(tabulate(rows, headers=DECODED_HEADERS, tablefmt="grid"))


def run_visualizer(value=None):
    """Visualize an ID, generating one when none is given."""
    print_header("BIGID VISUALIZER")

    if value is None:
        print("No ID provided. Generating a new ID...")
        big_id = BigIDGenerator().generate(config.SHARD_ID)
        print(f"Generated ID: {big_id}")
    else:
        big_id = BigID.parse(value)

    visualize_binary(big_id)


def run_simulator(num_shards, ids_per_shard):
    """Run the fleet simulator."""
    print_header("FLEET SIMULATOR")

    simulator = FleetSimulator(num_shards=num_shards)
    print(f"Simulating {num_shards} shards with {ids_per_shard} IDs each")
    simulator.simulate_load(ids_per_shard=ids_per_shard)
    simulator.display_results(limit=10)


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(description="BigID generator")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    gen_parser = subparsers.add_parser("generate", help="Generate IDs")
    gen_parser.add_argument("--shard", type=int, default=config.SHARD_ID, help="Shard ID (0-255)")
    gen_parser.add_argument("--count", type=int, default=1, help="Number of IDs to generate")
    gen_parser.add_argument("--strict", action="store_true", default=config.STRICT_SHARD_ID,
                            help="Reject shard IDs outside 0-255 instead of truncating")

    dec_parser = subparsers.add_parser("decode", help="Decode IDs")
    dec_parser.add_argument("ids", nargs="+", help="Decimal IDs to decode")

    vis_parser = subparsers.add_parser("visualize", help="Show the bit layout of an ID")
    vis_parser.add_argument("id", nargs="?", help="Decimal ID to visualize")

    sim_parser = subparsers.add_parser("simulate", help="Run the fleet simulator")
    sim_parser.add_argument("--shards", type=int, default=4, help="Number of shards")
    sim_parser.add_argument("--ids", type=int, default=1000, help="IDs per shard")

    subparsers.add_parser("serve", help="Start the HTTP service")

    args = parser.parse_args(argv)
    logging.basicConfig(level=config.LOGGING["level"], format=config.LOGGING["format"])

    try:
        if args.command == "generate":
            run_generate(args.shard, args.count, args.strict)
        elif args.command == "decode":
            run_decode(args.ids)
        elif args.command == "visualize":
            run_visualizer(args.id)
        elif args.command == "simulate":
            run_simulator(args.shards, args.ids)
        elif args.command == "serve":
            from bigid.api import start
            start()
        else:
            parser.print_help()
    except (ParseError, ShardIDError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
