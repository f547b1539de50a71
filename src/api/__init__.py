"""HTTP API for delivery analytics."""
