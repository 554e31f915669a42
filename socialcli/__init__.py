"""socialcli - manage social network groups, members and notifications from a terminal."""

__version__ = "0.1.0"
__logo__ = "👥"
