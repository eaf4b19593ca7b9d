from __future__ import annotations
from typing import Iterable, List, Tuple
import logging

from grammar_fixer.ir import AppliedCorrection, Match

logger = logging.getLogger(__name__)


def apply_matches(text: str, matches: Iterable[Match]) -> Tuple[str, List[AppliedCorrection]]:
    """
    Splice remote findings into text.

    Matches are applied highest offset first so that a length-changing edit
    never shifts the offsets of matches still waiting to be applied. A match
    with no replacement candidates is reported by the checker but left as is.
    Overlapping spans are not merged: each splice lands on the string as it
    stands at that point.

    Returns the corrected text and the applied corrections in application order.
    """
    # sort descending so offsets remain valid; sorted() is stable for ties
    ordered = sorted(matches, key=lambda m: m.offset, reverse=True)

    corrected = text
    applied: List[AppliedCorrection] = []
    for match in ordered:
        if not match.replacements:
            continue
        replacement = match.replacements[0]
        before = corrected[match.offset:match.end]
        corrected = corrected[:match.offset] + replacement + corrected[match.end:]
        applied.append(AppliedCorrection(
            offset=match.offset,
            length=match.length,
            original=before,
            replacement=replacement,
            context_text=match.context_text,
            rule_id=match.rule_id,
        ))
        logger.debug(f'Fixed: "{match.context_text}" -> "{replacement}"')

    logger.info(f"Applied {len(applied)} corrections")
    return corrected, applied
