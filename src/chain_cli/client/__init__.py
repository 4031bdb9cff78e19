"""HTTP client, error types, and the chains API bridge."""
