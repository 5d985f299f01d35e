"""Artmeta CLI — Typer-based command-line interface.

Provides the ``artmeta`` command with subcommands for generating manifests,
verifying directories against them, and printing raw digests.

All output uses Rich for formatted terminal display.
"""
