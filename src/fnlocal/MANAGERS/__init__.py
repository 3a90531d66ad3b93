"""Managers for secrets, environment layering and local runs."""
