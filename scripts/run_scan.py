#!/usr/bin/env python3
"""
LMC Scan Script

Segments a text block, scores every sentence against a topic, and prints
the per-sentence diagnostics and averages.

Provider, thresholds, and worker count are read from config.json
("provider", "diagnostics", "scan" sections) unless overridden below.

Input:
    - Topic string and a text block (inline or from a file)
    - Optional pre-scored segments JSON ({"segments": [{text, coherence}]})

Output:
    - Sentence table and averages to console
    - Optional JSON export (--output)

Usage:
    python scripts/run_scan.py --topic "climate policy" --text-file essay.txt
    python scripts/run_scan.py --topic "climate policy" --text "..." --backend ollama
    python scripts/run_scan.py --topic "climate policy" --text "..." --segments scored.json
    python scripts/run_scan.py --example --backend ollama
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from common.logging.logger import get_logger
from common.config import config
from common.errors import ProviderFailure
from providers import StaticCoherenceProvider, get_provider
from scanner import ScanPipeline, ThresholdClassifier, get_estimator
from scanner.report import render_table, render_summary

logger = get_logger("run_scan")

# Sample input from the original scanner, used by --example
EXAMPLE_TOPIC = "L'étude des étoiles, des planètes et de l'univers"
EXAMPLE_TEXT = """Le système solaire est composé de huit planètes orbitant autour du Soleil.
La gravité maintient la cohésion des corps célestes dans la galaxie.
Les pommes de terre cuites chantent du jazz dans la rivière quantique du temps.
L'astrophysique étudie les propriétés physiques des objets célestes.
Le système est le système est le système est le système.
La nucléosynthèse stellaire produit des éléments lourds comme le carbone.
Xyz kjhdf kjhsdfkuy sdkjfh skdjfh kjsdfh gfdg."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="LMC Scan - Score sentences by topic coherence and entropy"
    )

    parser.add_argument("--topic", help="Context topic")

    source = parser.add_mutually_exclusive_group()
    source.add_argument("--text", help="Text block to analyze")
    source.add_argument("--text-file", type=Path, help="File containing the text block")
    source.add_argument(
        "--example",
        action="store_true",
        help="Scan the built-in sample topic and text"
    )

    parser.add_argument(
        "--segments",
        type=Path,
        default=None,
        help="Pre-scored segments JSON; skips the LLM provider"
    )
    parser.add_argument(
        "--backend",
        default=config.get("provider.backend"),
        help="Coherence provider backend (openai, ollama)"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=config.get("scan.max_workers"),
        help="Threads used for entropy estimation"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the scan result as JSON to this path"
    )
    parser.add_argument(
        "--labels",
        action="store_true",
        help="Show the original display labels (DÉCROCHAGE, BRUIT, ...)"
    )
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    topic = args.topic
    text = args.text
    if args.example:
        topic = topic or EXAMPLE_TOPIC
        text = EXAMPLE_TEXT
    elif args.text_file is not None:
        try:
            text = args.text_file.read_text(encoding="utf-8")
        except OSError as e:
            parser.error(f"cannot read {args.text_file}: {e}")
    elif text is None:
        parser.error("one of --text, --text-file or --example is required")

    if topic is None or not topic.strip():
        parser.error("--topic must not be empty")
    if not text.strip():
        parser.error("text block must not be empty")

    try:
        if args.segments is not None:
            provider = StaticCoherenceProvider.from_json_file(args.segments)
        else:
            try:
                provider = get_provider(args.backend)
            except ValueError as e:
                parser.error(str(e))

        try:
            estimator = get_estimator()
            classifier = ThresholdClassifier.from_config()
        except (ValueError, TypeError) as e:
            parser.error(f"invalid configuration: {e}")

        pipeline = ScanPipeline(
            provider=provider,
            estimator=estimator,
            classifier=classifier,
            max_workers=args.workers,
        )
        result = pipeline.scan(topic, text)
    except ProviderFailure as e:
        logger.error(f"Scan failed: {e}")
        print(f"Error: {e.user_message}", file=sys.stderr)
        return 1

    print("\n" + "=" * 60)
    print(f"LMC SCAN: {topic}")
    print("=" * 60)
    print(render_table(result, labels=args.labels))
    print("=" * 60)
    print(render_summary(result, labels=args.labels))

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)
        logger.info(f"Scan result written to {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
