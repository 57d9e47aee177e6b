# pump_launch/config.py

import os
from dotenv import load_dotenv

# Load .env from the project root
script_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.dirname(script_dir)
dotenv_path = os.path.join(project_root, '.env')
load_dotenv(dotenv_path=dotenv_path)

# --- Solana Node Connection (Required - MUST be in .env or environment) ---
SOLANA_NODE_RPC_ENDPOINT = os.getenv("SOLANA_NODE_RPC_ENDPOINT", "https://api.mainnet-beta.solana.com") # Default public RPC
# It's highly recommended to use a private RPC provider (Helius, QuickNode, etc.) via .env

# --- Wallet (Required - MUST be in .env or environment) ---
SOLANA_PRIVATE_KEY = os.getenv("SOLANA_PRIVATE_KEY")
# No default for private key

# --- Network ---
SOLANA_NETWORK = os.getenv("SOLANA_NETWORK", "mainnet")  # 'mainnet' or 'devnet'

# --- Initial Buy ---
BUY_SLIPPAGE_PERCENT = 10.0  # Max SOL cost = buy amount * (1 + 10%)

# --- Transaction Settings ---
COMPUTE_UNIT_LIMIT = 250_000  # pump.fun default for create
CONFIRM_COMMITMENT = "finalized"  # 'processed', 'confirmed' or 'finalized'
CONFIRM_TIMEOUT_SECONDS = 90
SKIP_PREFLIGHT = False

# --- Priority Fee Configuration ---
ENABLE_DYNAMIC_FEE = True
ENABLE_FIXED_FEE = False
PRIORITY_FEE_FIXED_AMOUNT_MICROLAMPORTS = 10000
EXTRA_PRIORITY_FEE_MICROLAMPORTS = 0
HARD_CAP_PRIORITY_FEE_MICROLAMPORTS = 1_000_000

# --- Audit ---
AUDIT_LOG_FILE = os.getenv("AUDIT_LOG_FILE")  # Unset: console only
