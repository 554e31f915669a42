"""CLI module for socialcli."""
