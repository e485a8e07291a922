"""Shared service utilities for the Pokedex services (logging and error handling)."""
