"""Structural validation for assets documents."""
