"""Protocol constants for the SimpleSwap ledger.

Centralizes fixed-point units, fee parameters and well-known addresses.
"""

# Fixed-point unit for spot prices (1e18), independent of asset decimals
PRICE_SCALE = 10**18

# Fees are expressed in basis points of this base
FEE_BASE = 10_000

# 0.3% swap fee, retained in the pool for share holders
DEFAULT_FEE_BPS = 30

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Default identity of the engine as an account on asset ledgers
DEFAULT_ENGINE_ADDRESS = "0x5157a6e0c0de000000000000000000000000a11e"

# Salt hashed into every share-ledger address derivation
SHARE_LEDGER_SALT = b"simpleswap.share-ledger.v1"

# Faucet defaults (1 day cooldown, 100 whole tokens per request at 18 decimals)
FAUCET_COOLDOWN_SECONDS = 24 * 60 * 60
FAUCET_REQUEST_AMOUNT = 100 * 10**18
