"""Shared helpers: duration codec, logging, constants and exceptions."""
