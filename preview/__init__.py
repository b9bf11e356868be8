"""Command-line preview of message resolution for a queue snapshot."""
