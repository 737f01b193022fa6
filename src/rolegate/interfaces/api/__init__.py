"""Falcon ASGI HTTP interface."""
