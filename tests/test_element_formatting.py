from petsteps.core.types import element_abbreviation, format_elements, normalize_element, strip_ansi


def test_element_abbreviations():
    assert element_abbreviation('fire') == 'FIR'
    assert element_abbreviation('Water') == 'WTR'


def test_format_elements_dual():
    out = format_elements(('earth', 'air'))
    assert strip_ansi(out) == 'ERT/AIR'


def test_format_elements_skips_missing_secondary():
    assert strip_ansi(format_elements(('fire', None))) == 'FIR'


def test_normalize_element():
    assert normalize_element('FIRE') == 'fire'
    assert normalize_element('lightning') is None
    assert normalize_element(None) is None
