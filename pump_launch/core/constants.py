LAMPORTS_PER_SOL = 1_000_000_000

# pump.fun's own default compute budget for create
DEFAULT_COMPUTE_UNIT_LIMIT = 250_000

# Anchor discriminators: sha256("global:<name>")[:8]
CREATE_DISCRIMINATOR = bytes.fromhex("181ec828051c0777")
BUY_DISCRIMINATOR = bytes.fromhex("66063d1201daebea")

BONDING_CURVE_SEED = b"bonding-curve"
METADATA_SEED = b"metadata"


def sol_to_lamports(amount_sol: float) -> int:
    """Converts a SOL amount to lamports, rounding to the nearest lamport."""
    return int(round(amount_sol * LAMPORTS_PER_SOL))
