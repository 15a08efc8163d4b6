"""Services that manage games on behalf of callers."""
