#!/usr/bin/env python3
"""Example CLI that fetches an account and prints its decoded state."""

import argparse
import logging
import sys

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from blockbuster.client import Client
from blockbuster.error import BlockbusterError


def main() -> None:
    parser = argparse.ArgumentParser(description="Fetch and decode a Solana account")
    parser.add_argument("address", help="Account address (base58)")
    parser.add_argument(
        "--env",
        default="mainnet-beta",
        choices=["mainnet-beta", "testnet", "devnet", "localnet"],
        help="Environment to connect to",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        addr = Pubkey.from_string(args.address)
    except ValueError as e:
        print(f"Invalid address: {e}")
        sys.exit(2)

    print(f"Fetching {addr} from {args.env}...\n")

    client = Client.from_env(args.env)

    try:
        info = client.fetch_account_info(addr)
    except Exception as e:
        print(f"Error fetching account: {e}")
        sys.exit(1)

    print("=== Account ===")
    print(f"Owner:      {info.owner}")
    print(f"Lamports:   {info.lamports}")
    print(f"Slot:       {info.slot}")
    print(f"Data Size:  {len(info.data or b'')} bytes")
    print()

    try:
        res = client.registry.dispatch_account_info(info)
    except BlockbusterError as e:
        print(f"Could not decode ({e.kind.name}): {e}")
        sys.exit(1)

    program, variant = res.classification()
    print(f"=== {program.name} / {variant.name if variant else '-'} ===")
    print(res.result())


if __name__ == "__main__":
    main()
