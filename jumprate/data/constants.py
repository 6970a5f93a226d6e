"""Market identifiers and fixed-point protocol constants."""

# Market symbols
USDC = "USDC"
DAI = "DAI"
WBTC = "WBTC"

# Mantissa (1e18): fixed-point unit for rates, utilization and kink
SCALE = 10**18

# Largest value an on-chain uint256 slot can hold
UINT256_MAX = 2**256 - 1

# Ticks per year assumed by the rate model
BLOCKS_PER_YEAR = 2_102_400  # 15 s blocks (pre-merge Compound v2 constant)
BLOCKS_PER_YEAR_POST_MERGE = 2_628_000  # 12 s slots
