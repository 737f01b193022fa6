"""Credential verifier adapters."""
