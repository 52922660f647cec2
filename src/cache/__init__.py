"""Feed store contract, freshness policy and store backends."""
