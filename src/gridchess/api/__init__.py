"""HTTP API for gridchess."""
