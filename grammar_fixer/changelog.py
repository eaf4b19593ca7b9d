from __future__ import annotations
from typing import Any, Dict, List
import json

from grammar_fixer.ir import CorrectionResult


def build_payload(original: str, result: CorrectionResult) -> Dict[str, Any]:
    payload = result.to_dict()
    payload["original_text"] = original
    payload["stats"] = {
        "characters_in": len(original),
        "characters_out": len(result.corrected_text),
        "changes_applied": len(result.changes),
    }
    return payload


def write_json(path: str, payload: Dict[str, Any]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)


def render_txt(payload: Dict[str, Any]) -> str:
    lines: List[str] = []
    lines.append("Correction Report")
    lines.append("")
    if payload.get("used_fallback"):
        lines.append("Engine: local rules (approximate correction)")
        if payload.get("error_message"):
            lines.append(f"- Reason: {payload['error_message']}")
    else:
        lines.append("Engine: LanguageTool")
    lines.append("")
    stats = payload.get("stats", {})
    if stats:
        lines.append("Stats")
        for k, v in stats.items():
            lines.append(f"- {k}: {v}")
        lines.append("")
    changes = payload.get("changes", []) or []
    if changes:
        lines.append("Changes")
        for c in changes[:50]:
            rule = f" [{c['rule_id']}]" if c.get("rule_id") else ""
            lines.append(f"- @{c['offset']}: \"{c['original']}\" -> \"{c['replacement']}\"{rule}")
        if len(changes) > 50:
            lines.append(f"... plus {len(changes)-50} more.")
        lines.append("")
    lines.append("Corrected Text")
    lines.append(payload.get("corrected_text", ""))
    return "\n".join(lines)
