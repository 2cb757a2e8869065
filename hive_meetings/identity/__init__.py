"""Name resolution against the group roster."""
