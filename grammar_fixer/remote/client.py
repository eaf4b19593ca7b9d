from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING
import logging
import os

import requests

from grammar_fixer.apply import apply_matches
from grammar_fixer.errors import RemoteError, RemoteErrorKind
from grammar_fixer.ir import AppliedCorrection, Match

if TYPE_CHECKING:
    Transport = Callable[..., Any]

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://api.languagetool.org/v2/check"


@dataclass
class RemoteConfig:
    """Configuration for the LanguageTool check endpoint."""
    endpoint: str = DEFAULT_ENDPOINT
    language: str = "en-US"
    enabled_only: bool = False  # False = run every rule category
    timeout: float = 10.0       # seconds, covers connect and read

    @classmethod
    def from_env(cls) -> "RemoteConfig":
        cfg = cls()
        cfg.endpoint = os.environ.get("GRAMMAR_FIXER_ENDPOINT", cfg.endpoint)
        cfg.language = os.environ.get("GRAMMAR_FIXER_LANGUAGE", cfg.language)
        timeout = os.environ.get("GRAMMAR_FIXER_TIMEOUT")
        if timeout:
            try:
                cfg.timeout = float(timeout)
            except ValueError:
                raise ValueError(f"GRAMMAR_FIXER_TIMEOUT must be a number of seconds, got {timeout!r}") from None
        return cfg


@dataclass
class RemoteCorrection:
    """Outcome of a successful remote correction."""
    text: str
    changes: List[AppliedCorrection] = field(default_factory=list)
    matches: List[Match] = field(default_factory=list)


class MalformedResponse(ValueError):
    pass


def classify_failure(exc: BaseException) -> RemoteError:
    """
    Map a transport outcome onto the three remote failure kinds.

    - timed out (connect or read)          -> timeout
    - a response arrived but was unusable  -> service_unavailable
    - nothing came back at all             -> unreachable
    """
    if isinstance(exc, RemoteError):
        return exc
    detail = f"{type(exc).__name__}: {exc}"
    if isinstance(exc, requests.Timeout):
        return RemoteError(RemoteErrorKind.TIMEOUT, detail)
    # bad status codes carry their response
    if getattr(exc, "response", None) is not None:
        return RemoteError(RemoteErrorKind.SERVICE_UNAVAILABLE, detail)
    if isinstance(exc, requests.exceptions.JSONDecodeError):
        return RemoteError(RemoteErrorKind.SERVICE_UNAVAILABLE, detail)
    # bad URLs and other request errors never produced a response
    if isinstance(exc, requests.RequestException):
        return RemoteError(RemoteErrorKind.UNREACHABLE, detail)
    if isinstance(exc, ValueError):
        return RemoteError(RemoteErrorKind.SERVICE_UNAVAILABLE, detail)
    return RemoteError(RemoteErrorKind.UNREACHABLE, detail)


def _utf16_index_map(text: str) -> Optional[Dict[int, int]]:
    # LanguageTool counts offsets in UTF-16 code units; only astral
    # characters make those differ from str indices
    if all(ord(ch) <= 0xFFFF for ch in text):
        return None
    mapping: Dict[int, int] = {}
    units = 0
    for i, ch in enumerate(text):
        mapping[units] = i
        units += 2 if ord(ch) > 0xFFFF else 1
    mapping[units] = len(text)
    return mapping


def parse_matches(payload: Any, text: str) -> List[Match]:
    """Turn a /v2/check response body into Match objects against ``text``."""
    if not isinstance(payload, dict) or not isinstance(payload.get("matches"), list):
        raise MalformedResponse("response body has no 'matches' list")

    index_map = _utf16_index_map(text)
    matches: List[Match] = []
    for raw in payload["matches"]:
        try:
            offset = int(raw["offset"])
            length = int(raw["length"])
        except (KeyError, TypeError, ValueError):
            logger.warning(f"Skipping malformed match: {raw!r}")
            continue

        if index_map is not None:
            start, end = index_map.get(offset), index_map.get(offset + length)
            if start is None or end is None:
                logger.warning(f"Skipping match splitting a surrogate pair at offset {offset}")
                continue
            offset, length = start, end - start

        if offset < 0 or length <= 0 or offset + length > len(text):
            logger.warning(f"Skipping out-of-range match at offset {offset} (length {length})")
            continue

        candidates = raw.get("replacements")
        if not isinstance(candidates, list):
            candidates = []
        replacements = tuple(
            r["value"] for r in candidates
            if isinstance(r, dict) and isinstance(r.get("value"), str)
        )
        context = raw.get("context")
        rule = raw.get("rule")
        matches.append(Match(
            offset=offset,
            length=length,
            replacements=replacements,
            context_text=context.get("text") if isinstance(context, dict) else None,
            message=raw.get("message"),
            rule_id=rule.get("id") if isinstance(rule, dict) else None,
        ))
    return matches


class LanguageToolClient:
    """Thin wrapper around LanguageTool's public check API."""

    def __init__(self, config: Optional[RemoteConfig] = None, transport: Optional["Transport"] = None):
        self.config = config or RemoteConfig()
        self._transport = transport
        self._session: Optional[requests.Session] = None

    @property
    def transport(self) -> "Transport":
        """Lazily created requests session unless a transport was injected."""
        if self._transport is None:
            if self._session is None:
                self._session = requests.Session()
            self._transport = self._session.post
        return self._transport

    def _form(self, text: str) -> Dict[str, str]:
        return {
            "text": text,
            "language": self.config.language,
            "enabledOnly": "true" if self.config.enabled_only else "false",
        }

    def check(self, text: str) -> List[Match]:
        """
        Send text to the checker and return its findings.

        Raises RemoteError for a timeout, a bad status or body, or a failed
        connection.
        """
        logger.info(f"Sending to LanguageTool: {text[:50]}...")
        try:
            response = self.transport(self.config.endpoint, data=self._form(text), timeout=self.config.timeout)
            response.raise_for_status()
        except Exception as e:
            err = classify_failure(e)
            logger.warning(f"LanguageTool API error ({err.kind.value}): {err.detail}")
            raise err from e

        try:
            matches = parse_matches(response.json(), text)
        except Exception as e:
            # a response arrived, so any fault from here on is in its body
            err = RemoteError(RemoteErrorKind.SERVICE_UNAVAILABLE, f"{type(e).__name__}: {e}")
            logger.warning(f"LanguageTool API error ({err.kind.value}): {err.detail}")
            raise err from e

        logger.info(f"LanguageTool found {len(matches)} potential issues")
        return matches

    def correct(self, text: str) -> RemoteCorrection:
        matches = self.check(text)
        corrected, changes = apply_matches(text, matches)
        return RemoteCorrection(text=corrected, changes=changes, matches=matches)

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None
            self._transport = None


def correct_remote(text: str, client: Optional[LanguageToolClient] = None) -> str:
    """Correct text with the remote checker; raises RemoteError on any failure."""
    if client is not None:
        return client.correct(text).text
    client = LanguageToolClient()
    try:
        return client.correct(text).text
    finally:
        client.close()
