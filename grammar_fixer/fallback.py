from __future__ import annotations
from typing import Optional
import re

from grammar_fixer.rules.load_rules import RuleTable, default_rule_table

_SPACE_BEFORE_PUNCT = re.compile(r"\s+([.,!?])")
_SPACE_AFTER_SENTENCE = re.compile(r"([.!?])\s*(\w)")
_WHITESPACE_RUN = re.compile(r"\s+")
_SENTENCE_START = re.compile(r"(^\s*|[.!?]\s+)([a-z])")


def _normalize_punctuation(text: str) -> str:
    """
    Tidy spacing around punctuation, in order:
    - drop whitespace before . , ! ?
    - exactly one space after . ! ? when a word character follows
    - collapse every whitespace run (newlines included) to one space
    """
    text = _SPACE_BEFORE_PUNCT.sub(r"\1", text)
    text = _SPACE_AFTER_SENTENCE.sub(r"\1 \2", text)
    text = _WHITESPACE_RUN.sub(" ", text)
    return text


def _capitalize_sentences(text: str) -> str:
    return _SENTENCE_START.sub(lambda m: m.group(1) + m.group(2).upper(), text)


def correct_fallback(text: Optional[str], rules: Optional[RuleTable] = None) -> str:
    """
    Local rule-based correction used when the remote checker is unavailable.

    Applies every rule of the table in order, then punctuation spacing and
    sentence capitalisation, and trims the result. Pure and deterministic;
    returns '' for empty input.
    """
    if not text:
        return ""
    table = default_rule_table() if rules is None else rules

    corrected = text
    for rule in table:
        corrected = rule.apply(corrected)

    corrected = _normalize_punctuation(corrected)
    corrected = _capitalize_sentences(corrected)
    return corrected.strip()
