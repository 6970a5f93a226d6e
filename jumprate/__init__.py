"""Jump rate interest model for lending-pool markets."""
