"""Parsers for stack files, environment files and language templates."""
