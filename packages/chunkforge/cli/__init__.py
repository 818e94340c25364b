"""Command-line interface for chunkforge."""
