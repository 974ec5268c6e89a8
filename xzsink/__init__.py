"""Streaming compression through an external xz process."""
