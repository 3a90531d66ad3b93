"""Process execution and entrypoint resolution."""
