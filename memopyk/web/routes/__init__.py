"""
Routeurs de l'API.

Tous sont montés sous /api, sauf health qui expose aussi /health à la racine.
"""
