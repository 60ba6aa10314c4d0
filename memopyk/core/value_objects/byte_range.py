"""
Objet valeur pour les requêtes HTTP partielles (en-tête Range).

Seule l'unité "bytes" est prise en charge. Pour une requête multi-plages,
seule la première plage est servie.
"""

from dataclasses import dataclass
from typing import Optional


class RangeNotSatisfiableError(ValueError):
    """
    Plage valide syntaxiquement mais hors du fichier (HTTP 416).

    Attributs :
        size : Taille totale de la ressource en octets
    """

    def __init__(self, size: int) -> None:
        self.size = size
        super().__init__(f"Range not satisfiable for resource of {size} bytes")

    @property
    def content_range(self) -> str:
        """Valeur de l'en-tête Content-Range d'une réponse 416."""
        return f"bytes */{self.size}"


@dataclass(frozen=True)
class ByteRange:
    """
    Plage d'octets inclusive [start, end].

    Attributs :
        start : Premier octet servi
        end : Dernier octet servi (inclus)
    """

    start: int
    end: int

    @property
    def length(self) -> int:
        """Nombre d'octets couverts par la plage."""
        return self.end - self.start + 1

    def content_range(self, size: int) -> str:
        """Valeur de l'en-tête Content-Range d'une réponse 206."""
        return f"bytes {self.start}-{self.end}/{size}"


def parse_range_header(header: Optional[str], size: int) -> Optional[ByteRange]:
    """
    Interprète un en-tête Range pour une ressource de `size` octets.

    Formes acceptées : "bytes=100-199", "bytes=100-" et "bytes=-500"
    (les 500 derniers octets). La fin est ramenée au dernier octet du fichier.

    Args :
        header : Valeur brute de l'en-tête (None si absent)
        size : Taille de la ressource

    Retourne :
        La plage à servir, ou None si l'en-tête est absent ou mal formé
        (la ressource est alors servie en entier).

    Raises :
        RangeNotSatisfiableError : Si la plage ne recouvre aucun octet
    """
    if not header:
        return None

    unit, sep, ranges = header.strip().partition("=")
    if not sep or unit.strip().lower() != "bytes":
        return None

    first = ranges.split(",")[0].strip()
    start_s, sep, end_s = first.partition("-")
    if not sep:
        return None
    start_s, end_s = start_s.strip(), end_s.strip()

    # Suffixe : les N derniers octets
    if not start_s:
        if not end_s.isdigit():
            return None
        suffix = int(end_s)
        if suffix == 0 or size == 0:
            raise RangeNotSatisfiableError(size)
        return ByteRange(start=max(size - suffix, 0), end=size - 1)

    if not start_s.isdigit():
        return None
    start = int(start_s)

    if end_s:
        if not end_s.isdigit():
            return None
        end = int(end_s)
        if end < start:
            return None
    else:
        end = size - 1

    if start >= size:
        raise RangeNotSatisfiableError(size)

    return ByteRange(start=start, end=min(end, size - 1))
