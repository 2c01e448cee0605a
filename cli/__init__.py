"""Serpa command-line interface."""
