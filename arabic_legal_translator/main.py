"""
CLI entry point for Arabic/French legal translation.

Usage:
    # French to Arabic, source language inferred from the script
    arabic-legal-translator "Le contrat est nul." --target ar

    # Arabic to French with a family-law terminology set
    arabic-legal-translator "عقد الزواج" --target fr --domain family

    # Full outcome with per-engine diagnostics
    arabic-legal-translator "Le jugement est rendu." --target ar --json
"""

import argparse
import asyncio
import json
import logging
import sys

from arabic_legal_translator.config import DomainHint, EngineName, Language, TranslationConfig
from arabic_legal_translator.errors import CapacityExceeded, ConfigurationFault
from arabic_legal_translator.pipeline import LegalTranslationPipeline
from arabic_legal_translator.utils import setup_logging

EXIT_OK = 0
EXIT_CONFIGURATION = 1
EXIT_CAPACITY = 2


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="arabic-legal-translator",
        description=(
            "Translate Arabic/French legal text fragments through ranked "
            "translation engines, returning only clean, single-script text."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s "Le contrat est nul." --target ar
  %(prog)s "عقد الزواج" --target fr --domain family --json
  %(prog)s "Le jugement est rendu." --target ar --engines deepl,google

Environment variables for API keys:
  ANTHROPIC_API_KEY        - Anthropic Claude API key
  OPENAI_API_KEY           - OpenAI API key
  DEEPL_API_KEY            - DeepL API key
  GOOGLE_TRANSLATE_API_KEY - Google Cloud Translation API key
        """,
    )

    parser.add_argument("text", type=str, help="Legal text fragment to translate")
    parser.add_argument(
        "--target", "-t",
        required=True,
        choices=[lang.value for lang in Language],
        help="Target language",
    )
    parser.add_argument(
        "--source", "-s",
        choices=[lang.value for lang in Language],
        default=None,
        help="Source language (default: inferred from the text's script)",
    )
    parser.add_argument(
        "--domain", "-d",
        choices=[domain.value for domain in DomainHint],
        default=DomainHint.GENERIC.value,
        help="Legal domain for terminology and fallback text (default: generic)",
    )
    parser.add_argument(
        "--engines",
        type=str,
        default=None,
        help="Comma-separated engines in priority order (default: claude,openai,deepl,google)",
    )
    parser.add_argument(
        "--timeout-ms",
        type=int,
        default=None,
        help="Per-engine timeout in milliseconds",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full outcome with diagnostics as JSON",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")

    # API keys (override env vars)
    parser.add_argument("--anthropic-key", type=str, help="Anthropic API key")
    parser.add_argument("--openai-key", type=str, help="OpenAI API key")
    parser.add_argument("--deepl-key", type=str, help="DeepL API key")
    parser.add_argument("--google-key", type=str, help="Google Translate API key")

    args = parser.parse_args(argv)
    if args.source is not None and args.source == args.target:
        parser.error("--source and --target must be different languages")
    if args.engines:
        known = [engine.value for engine in EngineName]
        unknown = [
            name.strip()
            for name in args.engines.split(",")
            if name.strip() and name.strip() not in known
        ]
        if unknown:
            parser.error(
                f"unknown engine(s): {', '.join(unknown)} "
                f"(choose from {', '.join(known)})"
            )
    return args


def build_config(args: argparse.Namespace) -> TranslationConfig:
    config = TranslationConfig(
        anthropic_api_key=args.anthropic_key,
        openai_api_key=args.openai_key,
        deepl_api_key=args.deepl_key,
        google_api_key=args.google_key,
    )
    if args.engines:
        engine_map = {engine.value: engine for engine in EngineName}
        config.engines = [
            engine_map[name.strip()]
            for name in args.engines.split(",")
            if name.strip()
        ]
    if args.timeout_ms is not None:
        config.engine_timeout_ms = args.timeout_ms
    return config


async def _run(pipeline: LegalTranslationPipeline, args: argparse.Namespace):
    try:
        return await pipeline.translate(
            args.text,
            target_lang=Language(args.target),
            source_lang=Language(args.source) if args.source else None,
            domain=DomainHint(args.domain),
        )
    finally:
        await pipeline.aclose()


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    config = build_config(args)
    if not config.get_available_engines():
        print(
            "Error: No translation API keys configured.\n"
            "Set at least one of these environment variables:\n"
            "  ANTHROPIC_API_KEY\n"
            "  OPENAI_API_KEY\n"
            "  DEEPL_API_KEY\n"
            "  GOOGLE_TRANSLATE_API_KEY\n"
            "\nOr pass keys via CLI: --anthropic-key, --deepl-key, etc.",
            file=sys.stderr,
        )
        return EXIT_CONFIGURATION

    try:
        pipeline = LegalTranslationPipeline(config)
    except ConfigurationFault as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIGURATION

    try:
        outcome = asyncio.run(_run(pipeline, args))
    except CapacityExceeded as e:
        print(f"Busy: {e}", file=sys.stderr)
        return EXIT_CAPACITY

    if args.json:
        print(json.dumps(outcome.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(outcome.text)
        if outcome.status.value != "accepted":
            print(f"[{outcome.status.value}]", file=sys.stderr)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
