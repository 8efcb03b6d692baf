"""Command-line interface for pr-automerge."""
