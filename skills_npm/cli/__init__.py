"""Command-line interface for skills-npm."""
