#!/usr/bin/env python3
"""Check that SKILL.md agrees with the resolver scripts it documents.

Frontmatter must carry a valid ``name`` (matching the skill directory), a
``description`` and an optional ``compatibility`` note. The body may only
reference scripts that exist, and its configuration section must list exactly
the ``SUPERFLUID_*`` variables the scripts read.
"""

from __future__ import annotations

import argparse
import re
import sys
import unicodedata
from pathlib import Path
from typing import Any

import yaml

# Local imports for script execution (python3 scripts/validate_skill.py ...)
SCRIPT_DIR = Path(__file__).resolve().parent
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from cli_common import json_dump  # noqa: E402
from settings import ENV_KEYS  # noqa: E402

SKILL_FILE = "SKILL.md"
FRONTMATTER_FIELDS = {"name", "description", "license", "compatibility", "metadata", "allowed-tools"}
MAX_NAME_CHARS = 64
MAX_DESCRIPTION_CHARS = 1024
MAX_COMPATIBILITY_CHARS = 500

SCRIPT_REF_RE = re.compile(r"\bscripts/([A-Za-z0-9_\-]+\.py)\b")
ENV_REF_RE = re.compile(r"\b(SUPERFLUID_[A-Z0-9_]+)\b")


def split_skill_file(text: str) -> tuple[dict[str, Any], str]:
    if not text.startswith("---"):
        raise ValueError(f"{SKILL_FILE} must start with YAML frontmatter (---)")
    frontmatter, sep, rest = text[3:].partition("\n---")
    if not sep:
        raise ValueError(f"{SKILL_FILE} frontmatter is not closed with ---")
    meta = yaml.safe_load(frontmatter)
    if not isinstance(meta, dict):
        raise ValueError(f"{SKILL_FILE} frontmatter must be a YAML mapping")
    return meta, rest.partition("\n")[2].strip()


def _check_text_field(meta: dict[str, Any], field: str, limit: int, *, required: bool) -> list[str]:
    if field not in meta:
        return [f"Missing required field in frontmatter: {field}"] if required else []
    value = meta[field]
    if not isinstance(value, str) or not value.strip():
        return [f"Field '{field}' must be a non-empty string"]
    if len(value) > limit:
        return [f"Field '{field}' exceeds {limit} characters ({len(value)} chars)"]
    return []


def check_name(meta: dict[str, Any], skill_dir: Path) -> list[str]:
    errors = _check_text_field(meta, "name", MAX_NAME_CHARS, required=True)
    if errors:
        return errors
    name = unicodedata.normalize("NFKC", meta["name"].strip())
    if name != name.lower():
        errors.append("Skill name must be lowercase")
    if name.startswith("-") or name.endswith("-") or "--" in name:
        errors.append("Skill name cannot start/end with a hyphen or contain consecutive hyphens")
    if not all(ch.isalnum() or ch == "-" for ch in name):
        errors.append("Skill name contains invalid characters")
    if unicodedata.normalize("NFKC", skill_dir.name) != name:
        errors.append(f"Directory name '{skill_dir.name}' must match skill name '{name}'")
    return errors


def check_script_refs(body: str, skill_dir: Path) -> list[str]:
    missing = sorted({ref for ref in SCRIPT_REF_RE.findall(body) if not (skill_dir / "scripts" / ref).is_file()})
    return [f"{SKILL_FILE} references missing script: scripts/{ref}" for ref in missing]


def check_env_refs(body: str) -> list[str]:
    documented = set(ENV_REF_RE.findall(body))
    errors = [f"{SKILL_FILE} documents unknown variable: {key}" for key in sorted(documented - set(ENV_KEYS))]
    errors.extend(f"{SKILL_FILE} does not document variable: {key}" for key in ENV_KEYS if key not in documented)
    return errors


def validate_skill(skill_path: Path) -> list[str]:
    skill_path = skill_path.resolve()
    skill_dir = skill_path.parent if skill_path.is_file() else skill_path
    skill_md = skill_dir / SKILL_FILE
    if not skill_md.is_file():
        return [f"Missing required file: {SKILL_FILE} in {skill_dir}"]

    try:
        meta, body = split_skill_file(skill_md.read_text(encoding="utf-8"))
    except (ValueError, yaml.YAMLError) as exc:
        return [str(exc)]

    errors: list[str] = []
    extra = set(meta) - FRONTMATTER_FIELDS
    if extra:
        errors.append(f"Unexpected fields in frontmatter: {', '.join(sorted(extra))}")
    errors.extend(check_name(meta, skill_dir))
    errors.extend(_check_text_field(meta, "description", MAX_DESCRIPTION_CHARS, required=True))
    errors.extend(_check_text_field(meta, "compatibility", MAX_COMPATIBILITY_CHARS, required=False))
    errors.extend(check_script_refs(body, skill_dir))
    errors.extend(check_env_refs(body))
    return errors


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="validate_skill.py", description=__doc__)
    parser.add_argument("skill_path", type=Path, help="skill directory or SKILL.md path")
    parser.add_argument("--json", action="store_true", help="emit machine-readable output")
    args = parser.parse_args(argv)

    errors = validate_skill(args.skill_path)
    if args.json:
        print(json_dump({"ok": not errors, "errors": errors}))
    elif errors:
        print("Validation failed:")
        for err in errors:
            print(f"- {err}")
    else:
        print(f"Valid skill: {args.skill_path}")
    return 0 if not errors else 1


if __name__ == "__main__":
    raise SystemExit(main())
