"""Configuration layer — pydantic models, TOML discovery, settings, logging."""
