"""
Couche domaine de MEMOPYK.

Entités, objets valeur et ports (interfaces abstraites), sans dépendance
vers la persistance ni vers le web.
"""
