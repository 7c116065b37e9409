"""HTTP API for the chat gateway."""
