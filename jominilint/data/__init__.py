"""Loaders and validators for each content kind."""
