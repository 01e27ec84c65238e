"""Shared CLI building blocks: option schema, options, models and validation."""
