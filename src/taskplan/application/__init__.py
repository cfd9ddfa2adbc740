"""Application services orchestrating the core domain."""
