"""Pokedex BFF Service API module.

Contains the login, Pokemon list/detail and health routes.
"""
