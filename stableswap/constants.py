"""Protocol constants for the StableSwap pool program.

Centralizes pool parameters enforced on-chain so that quotes can be checked
client-side before a transaction is built.
"""

# Amplification coefficient bounds
MIN_AMP = 1
MAX_AMP = 100_000

# Swap fee applied when a pool does not override it (0.30%)
DEFAULT_FEE_BPS = 30

# Basis point denominator (10000 bps = 100%)
BPS_DENOMINATOR = 10_000

# Share of the swap fee (in percent) accrued to the protocol admin
ADMIN_FEE_PCT = 50

# Smallest swap input and smallest first deposit the program accepts
MIN_SWAP = 100_000
MIN_DEPOSIT = 100_000_000

# Newton-Raphson iteration ceiling for the invariant and balance solvers
NEWTON_ITERATIONS = 255

# Convergence tolerance for Newton-Raphson (in base units)
CONVERGENCE_TOLERANCE = 1

# Shortest allowed amplification ramp (1 day)
RAMP_MIN_DURATION = 86_400

# Fixed-point scale for the virtual price (1e18)
PRICE_PRECISION = 10**18

# Pool size for the curve math (2-asset)
N_COINS = 2
