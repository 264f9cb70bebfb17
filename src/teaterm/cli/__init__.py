"""Command-line entry point and the bundled demo application."""
