"""Bundled catalog data files."""
