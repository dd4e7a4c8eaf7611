"""
TCG Guide.

Search the Pokémon trading-card catalog and keep a local list of favorites.
"""
