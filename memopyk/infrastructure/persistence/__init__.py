"""Persistance SQLModel : engine, modeles et repositories."""
