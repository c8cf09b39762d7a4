#!/usr/bin/env python3
"""
Architecture-as-Code CLI

Loads the Pkl models of a directory, prints the merged architecture and the
relationship validation report.

Usage:
    python cli.py                      # models dir from AAC_MODELS_DIR
    python cli.py data/models
    python cli.py data/models --json
    python cli.py data/models --file data/models/business/customers.pkl

Exit codes: 0 valid, 1 relationship findings, 2 nothing loaded.
"""

import argparse
import json
import logging
import sys
import time

from dotenv import load_dotenv

from aac.config.settings import get_settings
from aac.pkl.loader import PklModelLoader
from aac.validation.relationship_rules import RelationshipValidator

EXIT_VALID = 0
EXIT_FINDINGS = 1
EXIT_NOT_LOADED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Load and validate Pkl architecture models")
    parser.add_argument("models_dir", nargs="?", help="Directory with business/, application/, technology/")
    parser.add_argument("--file", help="Load a single .pkl file instead of the whole directory")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def print_report(summary: dict, result_dict: dict) -> None:
    print("=" * 70)
    print(f"ARCHITECTURE: {summary['name']} ({summary['uid']}) v{summary['version']}")
    print("=" * 70)
    print(f"Elements: {summary['total_elements']}  Relationships: {summary['total_relationships']}")
    for layer, count in summary["elements_by_layer"].items():
        print(f"  {layer:<12} {count}")
    for element_type, count in sorted(summary["elements_by_type"].items()):
        print(f"    {element_type:<22} {count}")

    print(f"\n{'=' * 70}")
    status = "VALID" if result_dict["isValid"] else "INVALID"
    print(f"RELATIONSHIP VALIDATION: {status}")
    for category, count in result_dict.get("validationSummary", {}).items():
        print(f"  {category:<12} {count}")
    for error in result_dict["errors"]:
        print(f"  [{error['code']}] {error['message']}")
    print("=" * 70)


def main(argv=None) -> int:
    load_dotenv(override=False)
    args = build_parser().parse_args(argv)
    settings = get_settings(dotenv=False)

    logging.basicConfig(level=logging.DEBUG if args.verbose else settings.log_level)

    models_dir = args.models_dir or settings.models_dir
    loader = PklModelLoader(models_dir)

    start_time = time.time()
    if args.file:
        architecture = loader.load_architecture_model(args.file)
        architectures = [architecture] if architecture else []
    else:
        architectures = loader.load_architecture_models()
    load_time = (time.time() - start_time) * 1000

    if not architectures:
        print(f"No architecture could be loaded from {args.file or models_dir}", file=sys.stderr)
        return EXIT_NOT_LOADED

    architecture = architectures[0]
    result = RelationshipValidator().validate_relationships(architecture.relationships)
    summary = architecture.get_summary()

    if args.json:
        print(json.dumps({"architecture": summary, "validation": result.to_dict()}, indent=2))
    else:
        print_report(summary, result.to_dict())
        print(f"Loaded in {load_time:.0f}ms\n")

    return EXIT_VALID if result.is_valid else EXIT_FINDINGS


if __name__ == "__main__":
    sys.exit(main())
