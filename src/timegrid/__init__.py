"""Conflict-free layout resolution for items on a lane/time grid."""

__version__ = "0.1.0"
