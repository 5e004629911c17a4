"""Configuration model, discovery, loading and logging."""
