"""Shared utilities for pr-automerge."""
