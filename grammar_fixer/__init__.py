"""
Grammar correction with a LanguageTool-first pipeline and a local rule-based fallback.

Main entry point: correct()
"""
from grammar_fixer.errors import RemoteError, RemoteErrorKind, ValidationError
from grammar_fixer.fallback import correct_fallback
from grammar_fixer.ir import AppliedCorrection, CorrectionRequest, CorrectionResult, Match
from grammar_fixer.pipeline import CorrectionEvent, correct
from grammar_fixer.remote import LanguageToolClient, RemoteConfig, correct_remote

__all__ = [
    "correct",
    "correct_fallback",
    "correct_remote",
    "CorrectionEvent",
    "CorrectionRequest",
    "CorrectionResult",
    "AppliedCorrection",
    "Match",
    "LanguageToolClient",
    "RemoteConfig",
    "RemoteError",
    "RemoteErrorKind",
    "ValidationError",
]
