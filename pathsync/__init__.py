"""pathsync - keep ad-hoc file mirrors in sync across machines."""
