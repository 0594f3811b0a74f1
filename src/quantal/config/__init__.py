"""Configuration — settings, config-file discovery, and logging setup."""
