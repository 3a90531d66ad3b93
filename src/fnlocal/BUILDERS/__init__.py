"""Builders for container invocations."""
