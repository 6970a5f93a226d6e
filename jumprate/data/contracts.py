"""Contract addresses and minimal ABIs for Compound v2 style markets."""

# ---------------------------------------------------------------------------
# cToken addresses (Ethereum mainnet)
# ---------------------------------------------------------------------------
CTOKEN_ADDRESSES: dict[str, str] = {
    "USDC": "0x39AA39c021dfbaE8faC545936693aC917d5E7563",
    "DAI": "0x5d3a536E4D6DbD6114cc1Ead35777bAB948E3643",
    "WBTC": "0xccF4429DB6322D5C611ee964527D42E5d685DD6a",
}

# ---------------------------------------------------------------------------
# Minimal ABIs: only the view functions we call
# ---------------------------------------------------------------------------


def _uint_getter(name: str) -> dict:
    return {
        "inputs": [],
        "name": name,
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    }


CTOKEN_ABI = [
    _uint_getter("getCash"),
    _uint_getter("totalBorrows"),
    _uint_getter("totalReserves"),
    _uint_getter("reserveFactorMantissa"),
    {
        "inputs": [],
        "name": "interestRateModel",
        "outputs": [{"name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
]

JUMP_RATE_MODEL_ABI = [
    _uint_getter("baseRatePerBlock"),
    _uint_getter("multiplierPerBlock"),
    _uint_getter("jumpMultiplierPerBlock"),
    _uint_getter("kink"),
    _uint_getter("blocksPerYear"),
    {
        "inputs": [],
        "name": "owner",
        "outputs": [{"name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "cash", "type": "uint256"},
            {"name": "borrows", "type": "uint256"},
            {"name": "reserves", "type": "uint256"},
        ],
        "name": "getBorrowRate",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "cash", "type": "uint256"},
            {"name": "borrows", "type": "uint256"},
            {"name": "reserves", "type": "uint256"},
            {"name": "reserveFactorMantissa", "type": "uint256"},
        ],
        "name": "getSupplyRate",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
]
