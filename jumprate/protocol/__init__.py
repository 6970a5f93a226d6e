"""Fixed-point rate calculators, ownership transfer and the governed model."""
