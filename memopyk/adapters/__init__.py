"""Adaptateurs vers les systèmes externes (stockage objet)."""
