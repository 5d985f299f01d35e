"""Subcommand implementations registered by ``artmeta.cli.app``."""
