"""Adapters — storage, Shapes API, Discord."""
