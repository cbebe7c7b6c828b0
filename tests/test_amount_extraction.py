import pytest

from budget_engine.parsing.amounts import AMOUNT_PATTERNS, extract_amount, match_amount


def test_currency_symbol_amount():
    assert extract_amount("Paid $45.99 for lunch") == 45.99


def test_thousands_suffix():
    assert extract_amount("Spent 15k on rent") == 15000
    assert extract_amount("spent 2.5k on laptop") == 2500


def test_thousands_separators_are_stripped():
    assert extract_amount("$1,250 for the sofa") == 1250


@pytest.mark.parametrize("text", [
    "",
    "lunch with friends",
    "Paid for coffee",
    "k k k",
    "$ for dinner",
])
def test_text_without_digits_has_no_amount(text):
    assert extract_amount(text) is None


@pytest.mark.parametrize("text, expected, pattern", [
    ("€20 groceries", 20, 'currency_symbol'),
    ("Spent 15k on rent", 15000, 'thousands_suffix'),
    ("20 dollars for pizza", 20, 'currency_word'),
    ("Paid 30 for taxi", 30, 'action_verb'),
    ("Dinner for 25", 25, 'preposition'),
    ("Coffee 4.50", 4.5, 'bare_number'),
])
def test_each_pattern_in_cascade(text, expected, pattern):
    match = match_amount(text)
    assert match is not None
    assert match.value == expected
    assert match.pattern == pattern


def test_symbol_beats_earlier_bare_number():
    # The bare 20 appears first but the currency-symbol pattern has precedence.
    assert extract_amount("Paid 20 for a $5 coffee") == 5


def test_large_value_with_k_is_not_multiplied():
    assert extract_amount("$20000k") == 20000


def test_implausible_amounts_are_rejected():
    assert extract_amount("Paid $0 for nothing") is None
    assert extract_amount("Spent $100000000 on a yacht") is None


def test_implausible_match_falls_through_to_next_pattern():
    match = match_amount("$0 voucher then paid 12")
    assert match.value == 12
    assert match.pattern == 'action_verb'


def test_case_insensitive_suffix_and_words():
    assert extract_amount("SPENT 3K ON FLIGHTS") == 3000
    assert extract_amount("40 EUROS at the market") == 40


def test_pattern_order_is_fixed():
    assert [p.name for p in AMOUNT_PATTERNS] == [
        'currency_symbol',
        'thousands_suffix',
        'currency_word',
        'action_verb',
        'preposition',
        'bare_number',
    ]


def test_short_euro_code_is_a_currency_word():
    match = match_amount("20 eur for groceries")
    assert match.value == 20
    assert match.pattern == 'currency_word'
