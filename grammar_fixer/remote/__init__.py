from __future__ import annotations

from grammar_fixer.remote.client import (
    LanguageToolClient,
    RemoteConfig,
    RemoteCorrection,
    classify_failure,
    correct_remote,
    parse_matches,
)

__all__ = [
    "LanguageToolClient",
    "RemoteConfig",
    "RemoteCorrection",
    "classify_failure",
    "correct_remote",
    "parse_matches",
]
