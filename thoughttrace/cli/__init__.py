"""thoughttrace command-line interface."""
