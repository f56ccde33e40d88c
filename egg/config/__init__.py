"""Configuration for the Egg interpreter: logging and settings."""
