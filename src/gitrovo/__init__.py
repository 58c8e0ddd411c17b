"""git-rovo: inspect a working tree's change-set and shape it for commits."""

__version__ = "0.3.0"
