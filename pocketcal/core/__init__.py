"""Configuration and clock helpers."""
