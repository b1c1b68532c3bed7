import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml

from src.adapters.annotations import PrefixedAnnotationAccessor, RoutingResource
from src.components.redirect import (
    ParseRedirectInput,
    ParseStatus,
    ValidateAnnotationsInput,
    create_redirect_parser,
    run_parse,
    run_validate,
)
from src.rules.loader import load_rules
from src.rules.models import Rules

logger = logging.getLogger("cli")

RULES_PATH = os.environ.get("REDIRECT_RULES_PATH", "rules.yaml")


def get_rules(path: str) -> Rules:
    rules_path = Path(path)
    if not rules_path.exists():
        logger.error(f"Rules file {rules_path} not found.")
        sys.exit(1)

    try:
        return load_rules(rules_path)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)


def load_resources(path: Path) -> list[RoutingResource]:
    """Read resources from a YAML or JSON file (list, or {resources: [...]})."""
    if not path.exists():
        logger.error(f"Resource file {path} not found.")
        sys.exit(1)

    with open(path) as f:
        try:
            data: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Invalid resource file {path}: {e}")
            sys.exit(1)

    if isinstance(data, dict):
        data = data.get("resources", [])
    if not isinstance(data, list):
        logger.error(f"Resource file {path} must contain a list of resources.")
        sys.exit(1)

    resources = []
    for item in data:
        try:
            resources.append(RoutingResource.from_dict(item))
        except (KeyError, TypeError, AttributeError):
            logger.warning(f"Ignoring malformed resource entry: {item!r}")
    return resources


def handle_parse(rules: Rules, args: argparse.Namespace) -> int:
    accessor = PrefixedAnnotationAccessor(rules.annotations.prefix)
    failed = 0

    for resource in load_resources(Path(args.file)):
        out = run_parse(ParseRedirectInput(resource=resource), accessor=accessor, rules=rules)
        record: dict[str, Any] = {
            "resource": resource.key,
            "status": out.result.status.value,
        }
        if out.result.status is ParseStatus.OK and out.result.config is not None:
            record["redirect"] = out.result.config.to_dict()
        if not out.success:
            failed += 1
            record["errors"] = [e.message for e in out.errors]
            logger.warning(f"Skipping redirect for {resource.key}: {record['errors']}")
        print(json.dumps(record, sort_keys=True))

    return 1 if failed else 0


def handle_validate(rules: Rules, args: argparse.Namespace) -> int:
    failed = 0

    for resource in load_resources(Path(args.file)):
        out = run_validate(ValidateAnnotationsInput(annotations=resource.annotations), rules=rules)
        for error in out.errors:
            print(f"{resource.key}: {error.message}")
        if not out.success:
            failed += 1

    if not failed:
        print("Annotations within allowed risk.")
    return 1 if failed else 0


def handle_docs(rules: Rules, args: argparse.Namespace) -> int:
    parser = create_redirect_parser(rules=rules)
    for name, meta in sorted(parser.get_documentation().items()):
        print(f"{rules.annotations.prefix}/{name}")
        print(f"  type: {meta.validator}  risk: {meta.risk.name.title()}  scope: {meta.scope}")
        print(f"  {meta.documentation}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Redirect annotation parser CLI")
    parser.add_argument("--rules", default=RULES_PATH, help="Path to rules.yaml")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # parse
    parse_parser = subparsers.add_parser("parse", help="Print redirect directives as JSON lines")
    parse_parser.add_argument("file", help="YAML/JSON file with resources")

    # validate
    validate_parser = subparsers.add_parser(
        "validate", help="Check annotations against the allowed risk level"
    )
    validate_parser.add_argument("file", help="YAML/JSON file with resources")

    # docs
    subparsers.add_parser("docs", help="Describe the redirect annotations")

    args = parser.parse_args(argv)

    rules = get_rules(args.rules)
    logging.basicConfig(level=rules.logging.level, format=rules.logging.format)

    if args.command == "parse":
        return handle_parse(rules, args)
    elif args.command == "validate":
        return handle_validate(rules, args)
    return handle_docs(rules, args)


if __name__ == "__main__":
    sys.exit(main())
