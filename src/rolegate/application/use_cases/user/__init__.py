"""User authorization queries."""
