"""
Tests unitaires pour l'interpretation de l'en-tete Range.

Ces tests verifient:
- Les trois formes de plage (debut-fin, debut-, -suffixe)
- Le bornage de la fin a la taille du fichier
- Les en-tetes mal formes (ignores) et les plages hors fichier (416)
"""

import pytest

from memopyk.core.value_objects import ByteRange, RangeNotSatisfiableError, parse_range_header

SIZE = 1000


class TestParseRangeHeader:
    """Tests pour parse_range_header."""

    def test_closed_range(self) -> None:
        """bytes=100-199 couvre 100 octets."""
        byte_range = parse_range_header("bytes=100-199", SIZE)
        assert byte_range == ByteRange(start=100, end=199)
        assert byte_range.length == 100
        assert byte_range.content_range(SIZE) == "bytes 100-199/1000"

    def test_open_ended_range(self) -> None:
        """bytes=900- va jusqu'au dernier octet."""
        assert parse_range_header("bytes=900-", SIZE) == ByteRange(start=900, end=999)

    def test_suffix_range(self) -> None:
        """bytes=-100 designe les 100 derniers octets."""
        assert parse_range_header("bytes=-100", SIZE) == ByteRange(start=900, end=999)

    def test_suffix_larger_than_file(self) -> None:
        """Un suffixe plus grand que le fichier couvre tout le fichier."""
        assert parse_range_header("bytes=-5000", SIZE) == ByteRange(start=0, end=999)

    def test_end_is_clamped_to_file_size(self) -> None:
        """Une fin au-dela du fichier est ramenee au dernier octet."""
        assert parse_range_header("bytes=500-99999", SIZE) == ByteRange(start=500, end=999)

    def test_only_first_range_is_used(self) -> None:
        """Seule la premiere plage d'une requete multi-plages est servie."""
        assert parse_range_header("bytes=0-9, 20-29", SIZE) == ByteRange(start=0, end=9)

    def test_whitespace_and_unit_case_are_tolerated(self) -> None:
        """Espaces et casse de l'unite ne gênent pas l'analyse."""
        assert parse_range_header(" Bytes= 10 - 19 ", SIZE) == ByteRange(start=10, end=19)

    @pytest.mark.parametrize(
        "header",
        [None, "", "items=0-10", "bytes=abc", "bytes=10-abc", "bytes=-", "bytes=50-10", "bytes"],
    )
    def test_malformed_headers_are_ignored(self, header) -> None:
        """Un en-tete absent ou mal forme donne None (fichier servi en entier)."""
        assert parse_range_header(header, SIZE) is None

    def test_start_beyond_file_is_not_satisfiable(self) -> None:
        """Un debut au-dela du fichier leve RangeNotSatisfiableError."""
        with pytest.raises(RangeNotSatisfiableError) as exc_info:
            parse_range_header("bytes=1000-1100", SIZE)
        assert exc_info.value.size == SIZE
        assert exc_info.value.content_range == "bytes */1000"

    def test_zero_suffix_is_not_satisfiable(self) -> None:
        """bytes=-0 ne designe aucun octet."""
        with pytest.raises(RangeNotSatisfiableError):
            parse_range_header("bytes=-0", SIZE)

    def test_any_range_on_empty_file_is_not_satisfiable(self) -> None:
        """Aucune plage n'est satisfaisable sur un fichier vide."""
        with pytest.raises(RangeNotSatisfiableError):
            parse_range_header("bytes=0-10", 0)
        with pytest.raises(RangeNotSatisfiableError):
            parse_range_header("bytes=-10", 0)
