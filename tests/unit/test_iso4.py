"""Tests for ISO 4 journal title abbreviation."""

from pathlib import Path

import pytest

from citimport.iso4 import Iso4Abbreviator, LtwaEntry, load_ltwa


@pytest.fixture
def abbreviator() -> Iso4Abbreviator:
    """Abbreviator over the bundled LTWA extract."""
    return Iso4Abbreviator()


@pytest.mark.unit
@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("Journal of Climate", "J. Clim."),
        ("Geophysical Research Letters", "Geophys. Res. Lett."),
        ("Bulletin of the American Meteorological Society", "Bull. Am. Meteorol. Soc."),
        ("Nature", "Nature"),
        ("Nature Climate Change", "Nature Clim. Change"),
        ("Journal of Climate, Letters", "J. Clim., Lett."),
        ("Annals of the Climate.", "Ann. Clim."),
        ("Of The", "Of The"),
    ],
)
def test_abbreviate(abbreviator: Iso4Abbreviator, title: str, expected: str) -> None:
    """Test titles abbreviate word by word with omitted articles and prepositions."""
    assert abbreviator.abbreviate(title) == expected


@pytest.mark.unit
def test_suffix_entry_keeps_root() -> None:
    """Test suffix entries replace only the matched ending."""
    abbreviator = Iso4Abbreviator([LtwaEntry.parse("-shire", "-sh.")])

    assert abbreviator.abbreviate("Dorsetshire Review") == "Dorsetsh. Review"


@pytest.mark.unit
def test_longest_prefix_wins() -> None:
    """Test the longest matching prefix entry is chosen."""
    abbreviator = Iso4Abbreviator(
        [LtwaEntry.parse("phys-", "phys."), LtwaEntry.parse("physiolog-", "physiol.")]
    )

    assert abbreviator.abbreviate("Physiological Physics") == "Physiol. Phys."


@pytest.mark.unit
def test_exact_entry_beats_prefix() -> None:
    """Test an exact word entry takes priority over a prefix entry."""
    abbreviator = Iso4Abbreviator(
        [LtwaEntry.parse("review-", "rev."), LtwaEntry.parse("reviews", "revs.")]
    )

    assert abbreviator.abbreviate("Annual Reviews") == "Annual Revs."


@pytest.mark.unit
def test_ltwa_entry_parse() -> None:
    """Test prefix, suffix and not-abbreviated markers."""
    assert LtwaEntry.parse("scienc-", "sci.") == LtwaEntry("scienc", "sci.", True, False)
    assert LtwaEntry.parse("-graphy", "-gr.") == LtwaEntry("graphy", "-gr.", False, True)
    assert LtwaEntry.parse("earth", "n.a.").abbreviation is None


@pytest.mark.unit
def test_normalize_abbreviation(abbreviator: Iso4Abbreviator) -> None:
    """Test known abbreviation words gain capitals and periods; others are kept."""
    assert abbreviator.normalize_abbreviation("j clim") == "J. Clim."
    assert abbreviator.normalize_abbreviation("J. Clim.") == "J. Clim."
    assert abbreviator.normalize_abbreviation("PNAS") == "PNAS"


@pytest.mark.unit
def test_load_ltwa_tsv(tmp_path: Path) -> None:
    """Test the ISSN centre tab-separated layout with header row."""
    path = tmp_path / "ltwa.txt"
    path.write_text("WORDS\tABBREVIATIONS\tLANGUAGES\nhydrolog-\thydrol.\teng\nocean-\tocean.\teng\n")

    entries = load_ltwa(path)

    assert [e.word for e in entries] == ["hydrolog", "ocean"]
    assert Iso4Abbreviator(entries).abbreviate("Hydrological Oceans") == "Hydrol. Ocean."


@pytest.mark.unit
def test_load_ltwa_csv(tmp_path: Path) -> None:
    """Test two-column CSV extracts."""
    path = tmp_path / "ltwa.csv"
    path.write_text("hydrolog-,hydrol.\n")

    assert load_ltwa(path) == [LtwaEntry("hydrolog", "hydrol.", True, False)]
