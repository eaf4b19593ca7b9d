from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional
import logging

from grammar_fixer.errors import RemoteError
from grammar_fixer.fallback import correct_fallback
from grammar_fixer.ir import CorrectionRequest, CorrectionResult
from grammar_fixer.remote.client import LanguageToolClient
from grammar_fixer.rules.load_rules import RuleTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CorrectionEvent:
    """Diagnostic notice emitted while a correction runs."""
    name: str  # remote.started|remote.succeeded|remote.failed|fallback.applied
    details: Dict[str, Any] = field(default_factory=dict)


EventListener = Callable[[CorrectionEvent], None]


def _emit(on_event: Optional[EventListener], name: str, **details: Any) -> None:
    event = CorrectionEvent(name=name, details=details)
    logger.debug(f"{name}: {details}")
    if on_event is None:
        return
    try:
        on_event(event)
    except Exception as e:
        # listeners observe only; their faults never change the result
        logger.warning(f"Event listener failed on {name}: {type(e).__name__}: {e}")


def correct(
    text: str,
    *,
    client: Optional[LanguageToolClient] = None,
    rules: Optional[RuleTable] = None,
    on_event: Optional[EventListener] = None,
) -> CorrectionResult:
    """
    Correct text, preferring the remote checker.

    One remote attempt is made. On any RemoteError the local fallback
    corrector runs on the original text and the result carries the error's
    message, so callers always get corrected text back.

    Raises ValidationError for blank input or input over 5000 characters.
    """
    request = CorrectionRequest.validated(text)
    owned = client is None
    client = client or LanguageToolClient()

    _emit(on_event, "remote.started", length=len(request.text))
    try:
        remote = client.correct(request.text)
    except RemoteError as err:
        logger.info(f"Using fallback corrections due to error: {err.message}")
        _emit(on_event, "remote.failed", kind=err.kind.value, message=err.message, detail=err.detail)
        corrected = correct_fallback(request.text, rules)
        _emit(on_event, "fallback.applied", length=len(corrected))
        return CorrectionResult(
            corrected_text=corrected,
            used_fallback=True,
            error_message=err.message,
            error_kind=err.kind,
        )
    finally:
        if owned:
            client.close()

    _emit(on_event, "remote.succeeded", matches=len(remote.matches), applied=len(remote.changes))
    return CorrectionResult(
        corrected_text=remote.text,
        used_fallback=False,
        changes=tuple(remote.changes),
    )
