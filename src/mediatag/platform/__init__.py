"""Platform adapters (logging, tag library access)."""
