"""Tests for the identifier filter."""

from doctag.identifier import to_identifier, to_identifier_func, to_path_identifier


class TestToIdentifier:
    def test_leading_digits_dropped(self):
        assert to_identifier("45_aceIn45") == "_aceIn45"

    def test_symbols_dropped(self):
        assert to_identifier("_ace3&$In45@") == "_ace3In45"

    def test_unicode_letters_kept(self):
        assert to_identifier("_aceÿ3&$In45@") == "_aceÿ3In45"
        assert to_identifier("名前") == "名前"

    def test_may_be_empty(self):
        assert to_identifier("123 $%") == ""

    def test_hash_dropped(self):
        assert to_identifier("#links") == "links"


class TestToPathIdentifier:
    def test_leading_hash_kept(self):
        assert to_path_identifier("#links") == "#links"

    def test_inner_hash_dropped(self):
        assert to_path_identifier("a#b") == "ab"

    def test_digits_after_hash(self):
        assert to_path_identifier("#2nd") == "#2nd"


def test_custom_rule():
    only_upper = lambda ch, length: ch.isupper()
    assert to_identifier_func("aBcD", only_upper) == "BD"

def test_custom_rule_sees_length():
    seen = []
    to_identifier_func("abc", lambda ch, length: seen.append(length) or ch != "b")
    assert seen == [0, 1, 1]
