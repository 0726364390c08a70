"""Framework adapters for tagpurge."""
