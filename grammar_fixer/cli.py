from __future__ import annotations
import argparse
import json
import logging
import sys
from typing import List, Optional

from grammar_fixer.changelog import build_payload, render_txt, write_json
from grammar_fixer.errors import ValidationError
from grammar_fixer.fallback import correct_fallback
from grammar_fixer.ir import CorrectionRequest, CorrectionResult
from grammar_fixer.pipeline import correct
from grammar_fixer.remote.client import LanguageToolClient, RemoteConfig


def _read_text(args, ap: argparse.ArgumentParser) -> str:
    if args.text is not None and args.file:
        ap.error("give either TEXT or --file, not both")
    if args.file:
        with open(args.file, "r", encoding="utf-8") as f:
            return f.read()
    if args.text is not None:
        return args.text
    return sys.stdin.read()


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        prog="grammar-fix",
        description="Grammar correction via LanguageTool with a local rule-based fallback"
    )
    ap.add_argument("text", nargs="?", help="Text to correct (default: read stdin)")
    ap.add_argument("--file", help="Read text from a UTF-8 file")
    ap.add_argument(
        "--offline",
        action="store_true",
        help="Skip LanguageTool and use only the local rules"
    )
    ap.add_argument("--json", action="store_true", help="Print the full result as JSON")
    ap.add_argument("--report", help="Also write a JSON report to this path")
    ap.add_argument("--explain", action="store_true", help="Print a readable report instead of bare text")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    remote_group = ap.add_argument_group("LanguageTool Options")
    try:
        defaults = RemoteConfig.from_env()
    except ValueError as e:
        ap.error(str(e))
    remote_group.add_argument(
        "--endpoint",
        default=defaults.endpoint,
        help="Check endpoint (or set GRAMMAR_FIXER_ENDPOINT env var)"
    )
    remote_group.add_argument(
        "--language",
        default=defaults.language,
        help="Language code (default: en-US, or GRAMMAR_FIXER_LANGUAGE)"
    )
    remote_group.add_argument(
        "--timeout",
        type=float,
        default=defaults.timeout,
        help="Request timeout in seconds (default: 10)"
    )

    args = ap.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    text = _read_text(args, ap)

    try:
        if args.offline:
            request = CorrectionRequest.validated(text)
            result = CorrectionResult(corrected_text=correct_fallback(request.text), used_fallback=True)
        else:
            client = LanguageToolClient(RemoteConfig(
                endpoint=args.endpoint,
                language=args.language,
                timeout=args.timeout,
            ))
            try:
                result = correct(text, client=client)
            finally:
                client.close()
    except ValidationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    payload = build_payload(text, result)
    if args.report:
        write_json(args.report, payload)

    if args.json:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    elif args.explain:
        print(render_txt(payload))
    else:
        if result.used_fallback and result.error_message:
            print(f"note: {result.error_message}", file=sys.stderr)
        print(result.corrected_text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
