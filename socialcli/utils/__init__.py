"""Utility helpers."""

from socialcli.utils.helpers import ensure_dir, get_data_path, get_default_store_path

__all__ = ["ensure_dir", "get_data_path", "get_default_store_path"]
