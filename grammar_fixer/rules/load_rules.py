from __future__ import annotations
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Pattern, Tuple
import logging
import re
import yaml

logger = logging.getLogger(__name__)

DEFAULT_RULES_PATH = Path(__file__).parent / "fallback_rules.yml"


def _preserve_homophone(word: str) -> str:
    # their/there/they're are returned as written until context-aware
    # selection exists
    lowered = word.lower()
    if lowered == "their":
        return word
    if lowered == "there":
        return word
    if lowered == "they're":
        return word
    return word


TRANSFORMS: Dict[str, Callable[[str], str]] = {
    "preserve_homophone": _preserve_homophone,
}


@dataclass(frozen=True)
class LiteralReplacement:
    template: str  # may contain \1-style backreferences

    def apply(self, m: "re.Match[str]") -> str:
        return m.expand(self.template)


@dataclass(frozen=True)
class DerivedReplacement:
    name: str
    fn: Callable[[str], str]

    def apply(self, m: "re.Match[str]") -> str:
        return self.fn(m.group(0))


@dataclass(frozen=True)
class RuleEntry:
    id: str
    category: str
    pattern: Pattern[str]
    replacement: "LiteralReplacement | DerivedReplacement"
    rationale: str = ""

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement.apply, text)


RuleTable = Tuple[RuleEntry, ...]


def load_rule_pack(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _build_replacement(r: Dict[str, Any]):
    has_replace = "replace" in r
    has_transform = "transform" in r
    if has_replace == has_transform:
        raise ValueError(f"Rule {r.get('id')!r} must define exactly one of 'replace' or 'transform'")
    if has_replace:
        return LiteralReplacement(template=str(r["replace"]))
    name = str(r["transform"])
    if name not in TRANSFORMS:
        raise ValueError(f"Rule {r.get('id')!r} names unknown transform {name!r}")
    return DerivedReplacement(name=name, fn=TRANSFORMS[name])


def load_replacement_rules(rule_pack: Dict[str, Any]) -> RuleTable:
    rules = []
    for r in rule_pack.get("replacement_rules", []) or []:
        rules.append(RuleEntry(
            id=r["id"],
            category=r.get("category", "general"),
            pattern=re.compile(r["search"], re.IGNORECASE),
            replacement=_build_replacement(r),
            rationale=r.get("rationale", ""),
        ))
    return tuple(rules)


def load_rule_table(path: Optional[str] = None) -> RuleTable:
    """Load and compile a rule pack. Without a path, the cached packaged table is returned."""
    if path is None:
        return default_rule_table()
    return load_replacement_rules(load_rule_pack(path))


@lru_cache(maxsize=None)
def default_rule_table() -> RuleTable:
    table = load_replacement_rules(load_rule_pack(str(DEFAULT_RULES_PATH)))
    logger.debug(f"Loaded {len(table)} fallback rules from {DEFAULT_RULES_PATH.name}")
    return table
