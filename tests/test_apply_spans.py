from grammar_fixer.apply import apply_matches
from grammar_fixer.ir import Match

ALPHABET = "abcdefghijklmnopqrstuvwxyz"


def test_descending_application_is_order_independent():
    m1 = Match(offset=5, length=2, replacements=("XYZW",))
    m2 = Match(offset=20, length=3, replacements=("1",))
    expected = "abcdeXYZWhijklmnopqrst1xyz"
    assert apply_matches(ALPHABET, [m1, m2])[0] == expected
    assert apply_matches(ALPHABET, [m2, m1])[0] == expected


def test_only_target_spans_change():
    text = "I has a apple."
    out, applied = apply_matches(text, [
        Match(offset=6, length=1, replacements=("an",)),
        Match(offset=2, length=3, replacements=("have", "had")),
    ])
    assert out == "I have an apple."
    assert [(c.original, c.replacement) for c in applied] == [("a", "an"), ("has", "have")]


def test_match_without_candidates_is_left_alone():
    text = "Colour me surprised"
    out, applied = apply_matches(text, [Match(offset=0, length=6, replacements=())])
    assert out == text
    assert applied == []


def test_overlapping_matches_are_not_reconciled():
    # highest offset lands first, the lower one then splices the edited string
    out, applied = apply_matches("abcdef", [
        Match(offset=1, length=3, replacements=("X",)),
        Match(offset=2, length=2, replacements=("YY",)),
    ])
    assert out == "aXef"
    assert [c.original for c in applied] == ["cd", "bYY"]


def test_no_matches():
    assert apply_matches("unchanged", []) == ("unchanged", [])
