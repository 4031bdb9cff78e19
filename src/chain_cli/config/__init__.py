"""Profile configuration."""
