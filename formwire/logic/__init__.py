"""Codec, validation and outbound API logic."""
