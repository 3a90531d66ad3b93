"""Data models for stack files, run options and invocations."""
