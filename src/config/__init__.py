"""Configuration, logging and user-facing messages."""
