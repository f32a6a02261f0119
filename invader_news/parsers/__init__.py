"""Parsers for the invader-spotter.art news page."""
