"""Pokedex BFF DTOs.

Client-facing view models (``pokemon_v1``, ``auth_v1``) and upstream
response models (``pokeapi_v1``).
"""
