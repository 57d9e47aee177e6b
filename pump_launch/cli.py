# pump_launch/cli.py

import argparse
import asyncio
import importlib
import os
import sys
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from solana.rpc.commitment import Commitment

from pump_launch.core.client import SolanaClient
from pump_launch.core.constants import LAMPORTS_PER_SOL, sol_to_lamports
from pump_launch.core.exceptions import LaunchError
from pump_launch.core.priority_fee import PriorityFeeManager
from pump_launch.core.pubkeys import addresses_for_network, get_active_addresses, use_devnet_addresses
from pump_launch.core.wallet import Wallet, load_mint_keypair
from pump_launch.launch.creator import TokenCreator
from pump_launch.utils.audit_logger import LaunchAuditLogger
from pump_launch.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_MODULE = "pump_launch.config"
COMMITMENTS = ("processed", "confirmed", "finalized")

OPTIONAL_DEFAULTS: Dict[str, Any] = {
    "SOLANA_NETWORK": "mainnet",
    "BUY_SLIPPAGE_PERCENT": 10.0,
    "COMPUTE_UNIT_LIMIT": 250_000,
    "CONFIRM_COMMITMENT": "finalized",
    "CONFIRM_TIMEOUT_SECONDS": 90,
    "SKIP_PREFLIGHT": False,
    "ENABLE_DYNAMIC_FEE": True,
    "ENABLE_FIXED_FEE": False,
    "PRIORITY_FEE_FIXED_AMOUNT_MICROLAMPORTS": 10000,
    "EXTRA_PRIORITY_FEE_MICROLAMPORTS": 0,
    "HARD_CAP_PRIORITY_FEE_MICROLAMPORTS": 1_000_000,
    "AUDIT_LOG_FILE": "",
}


def _coerce(raw: Any, default: Any) -> Any:
    if isinstance(default, bool) and isinstance(raw, str):
        return raw.strip().lower() in ("1", "true", "yes", "on")
    return type(default)(raw)


def load_config(config_path: str = DEFAULT_CONFIG_MODULE) -> Dict[str, Any]:
    """Load and validate the launcher configuration from a Python module."""
    logger.info(f"Attempting to load configuration from: {config_path}")

    # Normalize to a Python import path
    module_path = config_path.replace("/", ".").replace("\\", ".")
    if module_path.endswith(".py"):
        module_path = module_path[:-3]

    try:
        cfg_mod = importlib.import_module(module_path)
    except ModuleNotFoundError:
        logger.critical(f"FATAL: Config module not found: '{module_path}'.")
        raise

    # 1) Required core values
    config: Dict[str, Any] = {}
    for var in ("SOLANA_NODE_RPC_ENDPOINT", "SOLANA_PRIVATE_KEY"):
        val = getattr(cfg_mod, var, None) or os.getenv(var)
        if not val:
            raise ValueError(f"Missing required config var: {var}")
        config[var] = val

    # 2) All other optional settings
    for var, default in OPTIONAL_DEFAULTS.items():
        raw = getattr(cfg_mod, var, None)
        if raw is None:
            raw = os.getenv(var)
        if raw is None:
            config[var] = default
            continue
        try:
            config[var] = _coerce(raw, default)
        except (TypeError, ValueError):
            logger.warning(f"Config warning: invalid type for {var}, using default {default}")
            config[var] = default

    config["SOLANA_NETWORK"] = str(config["SOLANA_NETWORK"]).lower()
    addresses_for_network(config["SOLANA_NETWORK"])  # raises on unknown network
    if str(config["CONFIRM_COMMITMENT"]).lower() not in COMMITMENTS:
        raise ValueError(f"CONFIRM_COMMITMENT must be one of {COMMITMENTS}")

    logger.info("Configuration loaded successfully.")
    return config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="pump.fun token launcher")
    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create", help="Create a token and its bonding curve")
    create.add_argument("--config", default=DEFAULT_CONFIG_MODULE,
                        help="Python module path (e.g., pump_launch.config)")
    create.add_argument("--name", required=True, help="Token name")
    create.add_argument("--symbol", required=True, help="Token symbol")
    create.add_argument("--uri", required=True, help="Metadata JSON URI")
    create.add_argument("--buy-amount", type=float, default=0.0, help="Initial buy in SOL (0 = no buy)")
    create.add_argument("--slippage", type=float, help="Override BUY_SLIPPAGE_PERCENT")
    create.add_argument("--mint-key", help="Base58 mint secret key (default: generate a new one)")
    create.add_argument("--devnet", action="store_true", help="Use devnet pump.fun addresses")
    return parser


async def run_create(args: argparse.Namespace, cfg: Dict[str, Any]) -> str:
    # Address mode is selected once, before anything reads it.
    if args.devnet or cfg["SOLANA_NETWORK"] == "devnet":
        use_devnet_addresses()

    wallet = Wallet(cfg["SOLANA_PRIVATE_KEY"])
    mint = load_mint_keypair(args.mint_key)
    print(f"Mint: {mint.pubkey()}")
    slippage = args.slippage if args.slippage is not None else cfg["BUY_SLIPPAGE_PERCENT"]
    audit_logger = LaunchAuditLogger(
        log_to_file=bool(cfg["AUDIT_LOG_FILE"]), filepath=cfg["AUDIT_LOG_FILE"] or "launch_audit.log"
    )

    async with SolanaClient(cfg["SOLANA_NODE_RPC_ENDPOINT"], skip_preflight=cfg["SKIP_PREFLIGHT"]) as client:
        balance = await client.get_balance_lamports(wallet.pubkey)
        logger.info(f"Wallet balance: {balance / LAMPORTS_PER_SOL:.6f} SOL")
        if balance < sol_to_lamports(args.buy_amount):
            logger.warning(f"Balance is below the requested buy of {args.buy_amount} SOL; the launch will likely fail.")

        fee_manager = PriorityFeeManager(
            client=client,
            enable_dynamic_fee=cfg["ENABLE_DYNAMIC_FEE"],
            enable_fixed_fee=cfg["ENABLE_FIXED_FEE"],
            fixed_fee=cfg["PRIORITY_FEE_FIXED_AMOUNT_MICROLAMPORTS"],
            extra_fee=cfg["EXTRA_PRIORITY_FEE_MICROLAMPORTS"],
            hard_cap=cfg["HARD_CAP_PRIORITY_FEE_MICROLAMPORTS"],
        )
        creator = TokenCreator(
            client=client,
            fee_manager=fee_manager,
            addresses=get_active_addresses(),
            compute_unit_limit=cfg["COMPUTE_UNIT_LIMIT"],
            confirm_commitment=Commitment(cfg["CONFIRM_COMMITMENT"].lower()),
            confirm_timeout_seconds=cfg["CONFIRM_TIMEOUT_SECONDS"],
            audit_logger=audit_logger,
        )
        return await creator.create_token(
            user=wallet.keypair,
            mint=mint,
            name=args.name,
            symbol=args.symbol,
            uri=args.uri,
            buy_amount_sol=args.buy_amount,
            slippage_percent=slippage,
        )


async def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()  # early .env load
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config(args.config)
    except Exception as e:
        logger.critical(f"Config load failed: {e}")
        return 1

    try:
        signature = await run_create(args, cfg)
    except LaunchError as e:
        if getattr(e, "broadcast", False):
            logger.error(f"Transaction {e.signature} may have landed; check the ledger before retrying. {e}")
        else:
            logger.error(f"Token creation failed, nothing was broadcast: {e}")
        return 2
    except ValueError as e:
        logger.error(f"Invalid key material: {e}")
        return 1
    print(f"Signature: {signature}")
    return 0


def run() -> None:
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")
        sys.exit(130)


if __name__ == "__main__":
    run()
