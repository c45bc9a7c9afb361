"""Configuration loading (YAML file + environment)."""
