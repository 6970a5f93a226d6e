"""Market snapshots and rate model configuration sources."""
