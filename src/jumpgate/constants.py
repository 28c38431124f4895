"""Protocol constants shared by the vault and the bridge model."""

# Every sweep uses nonce 0; the bridge's per-emitter sequence number makes
# each message unique.
BRIDGE_NONCE = 0

# Wormhole finality setting the token bridge publishes transfers with.
BRIDGE_CONSISTENCY_LEVEL = 15

# Wormhole carries amounts with at most 8 decimals.
WORMHOLE_MAX_DECIMALS = 8

# Dust cutoff of an 18-decimal token.
BRIDGE_DUST_CUTOFF = 10**10

one_quintillion = 10**18


def dust_cutoff(decimals: int) -> int:
    """Smallest amount that survives 8-decimal normalisation as a non-zero value."""
    return 10 ** max(decimals - WORMHOLE_MAX_DECIMALS, 0)
