import pytest

from bstviz.trees import ValidationError, parse_values, validate_name


def test_parse_values_trims_and_skips_blanks():
    assert parse_values(" 50, 30 ,,70, ") == [50, 30, 70]
    assert parse_values("-3,0,3") == [-3, 0, 3]
    assert parse_values("5, 5") == [5, 5]


@pytest.mark.parametrize("raw", ["1, two, 3", "1.5", "0x10"])
def test_parse_values_rejects_non_integers(raw):
    with pytest.raises(ValidationError, match="valid numbers"):
        parse_values(raw)


@pytest.mark.parametrize("raw", ["", " , ,"])
def test_parse_values_requires_a_number(raw):
    with pytest.raises(ValidationError, match="at least one number"):
        parse_values(raw)


def test_validate_name():
    assert validate_name("  my tree ") == "my tree"
    with pytest.raises(ValidationError, match="enter a name"):
        validate_name("   ")


@pytest.mark.parametrize("name", ["a<b", "tree()", "x/y", "back\\slash", "q?", "[x]", "a+b"])
def test_validate_name_rejects_unsafe_characters(name):
    with pytest.raises(ValidationError, match="unsafe"):
        validate_name(name)
