"""gridchess: turn-based move legality and attack maps for an 8x8 piece game."""
