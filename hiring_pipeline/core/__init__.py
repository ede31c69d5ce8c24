"""Configuration, logging and domain errors."""
