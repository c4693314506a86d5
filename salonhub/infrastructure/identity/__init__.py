"""Identity infrastructure: persistence, tokens and HTTP routes."""
