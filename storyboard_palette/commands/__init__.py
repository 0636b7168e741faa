"""Subcommands. Each module here defines a `command` picked up by storyboard_palette.registry."""
