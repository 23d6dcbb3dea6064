"""Parsers for assets documents and version expressions."""
