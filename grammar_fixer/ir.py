from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional, Tuple

from grammar_fixer.errors import RemoteErrorKind, ValidationError

MAX_TEXT_LENGTH = 5000


@dataclass(frozen=True)
class CorrectionRequest:
    text: str

    @classmethod
    def validated(cls, text: Optional[str]) -> "CorrectionRequest":
        if not text or not text.strip():
            raise ValidationError("Please enter some text to correct.")
        if len(text) > MAX_TEXT_LENGTH:
            raise ValidationError(f"Text is too long. Please limit to {MAX_TEXT_LENGTH} characters.")
        return cls(text=text)


@dataclass(frozen=True)
class Match:
    offset: int                          # index into the checked text
    length: int
    replacements: Tuple[str, ...] = ()   # best candidate first
    context_text: Optional[str] = None
    message: Optional[str] = None
    rule_id: Optional[str] = None

    @property
    def end(self) -> int:
        return self.offset + self.length


@dataclass(frozen=True)
class AppliedCorrection:
    offset: int
    length: int
    original: str
    replacement: str
    context_text: Optional[str] = None
    rule_id: Optional[str] = None


@dataclass(frozen=True)
class CorrectionResult:
    corrected_text: str
    used_fallback: bool = False
    error_message: Optional[str] = None
    error_kind: Optional[RemoteErrorKind] = None
    changes: Tuple[AppliedCorrection, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["error_kind"] = self.error_kind.value if self.error_kind else None
        d["changes"] = [asdict(c) for c in self.changes]
        return d
