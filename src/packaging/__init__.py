"""Package-format writers (BagIt)."""
