"""
Command line interface for Jumpgate.

    jumpgate encode-address terra terra1...
    jumpgate decode-payload 0x01...
    jumpgate simulate --config vault.json --amount 10000000000
"""

import argparse
import json
import sys
from typing import List, Optional

from .bridge import TransferPayload, get_address_encoder
from .chain import Chain
from .config import JumpgateConfig
from .constants import one_quintillion
from .errors import ContractRevert, JumpgateError
from .logging import LogConfig, LogContext, LogLevel, get_logger, setup_logging
from .testing import deploy_environment

logger = get_logger(__name__)


def _parse_hex(text: str) -> bytes:
    text = text[2:] if text.lower().startswith("0x") else text
    try:
        return bytes.fromhex(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a hex string: {text!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jumpgate",
        description="Tools for Jumpgate bridging vaults",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    encode = subparsers.add_parser(
        "encode-address", help="Encode a destination address as 32 bytes"
    )
    encode.add_argument("chain", help="Wormhole chain id or name (terra, solana, ...)")
    encode.add_argument("address", help="Human-readable destination address")
    encode.set_defaults(handler=_encode_address)

    decode = subparsers.add_parser(
        "decode-payload", help="Decode a Wormhole token transfer payload"
    )
    decode.add_argument("payload", type=_parse_hex, help="Hex-encoded payload")
    decode.set_defaults(handler=_decode_payload)

    simulate = subparsers.add_parser(
        "simulate", help="Deploy a vault on a local chain and bridge a deposit"
    )
    simulate.add_argument(
        "--config",
        help="JSON vault configuration; its token and bridge are ignored, "
        "simulate deploys fresh ones",
    )
    simulate.add_argument(
        "--amount",
        type=int,
        default=one_quintillion,
        help="Token amount to deposit before bridging (default: 10**18)",
    )
    simulate.add_argument(
        "--log-format", choices=["json", "text"], default="text", help="Log output format"
    )
    simulate.add_argument("--verbose", "-v", action="store_true", help="Log every transaction")
    simulate.set_defaults(handler=_simulate)

    return parser


def _encode_address(args: argparse.Namespace) -> int:
    encoded = get_address_encoder(args.chain)(args.address)
    print("0x" + encoded.hex())
    return 0


def _decode_payload(args: argparse.Namespace) -> int:
    payload = TransferPayload.decode(args.payload)
    print(json.dumps(payload.to_dict(), indent=2))
    return 0


def _simulate(args: argparse.Namespace) -> int:
    setup_logging(
        LogConfig(
            level=LogLevel.DEBUG if args.verbose else LogLevel.INFO,
            format_type=args.log_format,
        )
    )

    chain = Chain()
    deployer = chain.accounts[0]
    if args.config:
        config = JumpgateConfig.from_file(args.config)
        ignored = [key for key in ("token", "bridge") if getattr(config, key) is not None]
        if ignored:
            logger.warning(
                f"Ignoring {', '.join(ignored)} from {args.config}; "
                "simulate deploys its own token and bridge",
                context=LogContext(component="cli", operation="simulate"),
            )
        env = deploy_environment(
            chain,
            deployer=deployer,
            recipient_chain=config.recipient_chain,
            recipient=config.recipient,
            arbiter_fee=config.arbiter_fee,
            owner=config.owner,
        )
    else:
        env = deploy_environment(chain, deployer=deployer)

    env.token.transfer(env.jumpgate, args.amount, sender=deployer)
    try:
        receipt = env.jumpgate.bridge_tokens(sender=deployer)
    except ContractRevert as exc:
        print(json.dumps(exc.receipt.to_dict(), indent=2))
        return 1

    print(json.dumps(receipt.to_dict(), indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.handler(args)
    except JumpgateError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
