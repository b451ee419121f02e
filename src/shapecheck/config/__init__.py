"""Configuration — discovery, TOML-backed settings, and logging setup."""
