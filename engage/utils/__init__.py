"""Shared helpers: configuration, identity, validation and amounts."""
