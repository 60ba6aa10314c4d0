"""
Objets valeur immutables représentant des concepts du domaine sans identité.

Exports :
- ByteRange : Plage d'octets inclusive d'une requête partielle
- RangeNotSatisfiableError : Plage hors de la ressource (HTTP 416)
- parse_range_header : Interprétation de l'en-tête Range
"""

from memopyk.core.value_objects.byte_range import (
    ByteRange,
    RangeNotSatisfiableError,
    parse_range_header,
)

__all__ = [
    "ByteRange",
    "RangeNotSatisfiableError",
    "parse_range_header",
]
