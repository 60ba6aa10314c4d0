"""MEMOPYK - backend du site vitrine et du back-office."""

__version__ = "0.1.0"
