"""
Command line tools for inspecting a permit deployment.

    permitlayer domain --name Token --chain-id 1 --contract 0x...
    permitlayer nonce --ledger ledger.json 0xOwner
    permitlayer allowance --ledger ledger.json 0xOwner 0xSpender
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .domain import DomainSeparator
from .exceptions import PermitLayerError
from .store import JsonFileLedgerStore
from .utils import to_principal


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="permitlayer", description="PermitLayer tools")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    domain = sub.add_parser("domain", help="Print the domain separator")
    domain.add_argument("--name", required=True)
    domain.add_argument("--version", default="1")
    domain.add_argument("--chain-id", type=int, required=True)
    domain.add_argument("--contract", required=True, help="Verifying contract address")
    domain.add_argument("--json", action="store_true", help="Output as JSON")

    nonce = sub.add_parser("nonce", help="Show an owner's current nonce")
    nonce.add_argument("--ledger", required=True, help="Path to the JSON ledger")
    nonce.add_argument("owner")

    allowance = sub.add_parser("allowance", help="Show an allowance")
    allowance.add_argument("--ledger", required=True, help="Path to the JSON ledger")
    allowance.add_argument("owner")
    allowance.add_argument("spender")

    return parser


def _open_ledger(path: str) -> JsonFileLedgerStore:
    """Open an existing ledger; queries never create one"""
    if not Path(path).is_file():
        raise PermitLayerError(f"ledger file not found: {path}")
    return JsonFileLedgerStore(path)


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "domain":
            domain = DomainSeparator(
                name=args.name,
                version=args.version,
                chain_id=args.chain_id,
                verifying_contract=args.contract,
            )
            if args.json:
                print(json.dumps({**domain.to_eip712_dict(), "separator": domain.hex()}, indent=2))
            else:
                print(domain.hex())
        elif args.command == "nonce":
            store = _open_ledger(args.ledger)
            print(store.get_nonce(to_principal(args.owner)))
        elif args.command == "allowance":
            store = _open_ledger(args.ledger)
            print(store.get_allowance(to_principal(args.owner), to_principal(args.spender)))
    except (PermitLayerError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
