"""Application layer: use cases orchestrating the domain, and their ports."""
