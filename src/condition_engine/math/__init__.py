"""Offset and timing arithmetic for queue positions."""
