"""Identity and session helpers."""
