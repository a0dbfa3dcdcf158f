"""Configuration, record store, logging and security primitives."""
