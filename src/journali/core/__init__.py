"""Shared infrastructure: config, exceptions, logging, storage and the CLI."""
