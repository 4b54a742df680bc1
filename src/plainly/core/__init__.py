"""Core types, classification and mode policy."""
