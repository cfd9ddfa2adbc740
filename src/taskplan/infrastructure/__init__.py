"""Infrastructure adapters: skill files and the user configuration store."""
