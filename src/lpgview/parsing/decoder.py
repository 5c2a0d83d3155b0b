"""
Document decoding.

Turns raw document text into the record tree consumed by the compiler: a
mapping from node identifier to attribute table, plus the reserved
``relationships`` array of tables.

Two surface syntaxes decode into the same tree:
- TOML (the primary format), via ``tomllib``.
- The legacy line-oriented ``.lpg`` notation, where ``# id {json}`` opens a
  node, following lines form its Markdown description, and
  ``a -[type]-> b {json}`` declares a relationship.
"""

import json
import logging
import re
import tomllib
from enum import StrEnum
from pathlib import PurePath
from typing import Any, Dict, List, Optional

from ..config import RELATIONSHIPS_KEY
from ..core.errors import ParseError

logger = logging.getLogger(__name__)

RecordTree = Dict[str, Any]

_TOML_LOCATION = re.compile(r"at line (\d+), column (\d+)")
_LPG_NODE = re.compile(r"^#\s*(\w+)\s*(\{.*\})?$")
_LPG_EDGE = re.compile(r"^(\w+)\s*-\[(\w+)\]->\s*(\w+)\s*(\{.*\})?$")


class DocumentFormat(StrEnum):
    """Supported document syntaxes."""
    TOML = "toml"
    LPG = "lpg"

    @classmethod
    def from_name(cls, name: str) -> "DocumentFormat":
        """Pick a format from a file name; unknown suffixes default to TOML."""
        suffix = PurePath(name).suffix.lower()
        if suffix in (".lpg", ".md"):
            return cls.LPG
        return cls.TOML


def decode_toml(text: str) -> RecordTree:
    """Decode a TOML document into a validated record tree."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        line = getattr(e, "lineno", None)
        column = getattr(e, "colno", None)
        if line is None:
            match = _TOML_LOCATION.search(str(e))
            if match:
                line, column = int(match.group(1)), int(match.group(2))
        message = getattr(e, "msg", None) or _TOML_LOCATION.sub("", str(e)).rstrip(" ()")
        raise ParseError(f"Invalid TOML: {message}", line=line, column=column) from e

    return validate_tree(data)


def decode_lpg(text: str) -> RecordTree:
    """
    Decode the legacy line-oriented notation into a record tree.

    Lines starting with ``#`` that are not node headers (e.g. section
    dividers) are ignored, as are lines containing ``->`` that are not
    well-formed relationships. An edge line closes the open node.
    """
    tree: RecordTree = {}
    relationships: List[Dict[str, Any]] = []
    descriptions: Dict[str, List[str]] = {}
    current: Optional[str] = None

    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()

        if stripped.startswith("#"):
            match = _LPG_NODE.match(stripped)
            if match:
                node_id, props = match.groups()
                record = tree.setdefault(node_id, {})
                record.update(_json_props(props, lineno))
                descriptions.setdefault(node_id, [])
                current = node_id
            continue

        if "->" in stripped:
            match = _LPG_EDGE.match(stripped)
            if match:
                source, rel_type, target, props = match.groups()
                relationships.append({
                    **_json_props(props, lineno),
                    "source": source,
                    "target": target,
                    "type": rel_type,
                })
                current = None
            else:
                logger.debug(f"Ignoring malformed relationship on line {lineno}: {stripped}")
            continue

        if current is not None:
            descriptions[current].append(line.rstrip())

    for node_id, lines in descriptions.items():
        body = "\n".join(lines).strip("\n")
        if body:
            tree[node_id]["description"] = body

    if relationships:
        tree[RELATIONSHIPS_KEY] = relationships
    return validate_tree(tree)


def decode_document(text: str, fmt: DocumentFormat = DocumentFormat.TOML) -> RecordTree:
    if fmt == DocumentFormat.LPG:
        return decode_lpg(text)
    return decode_toml(text)


def validate_tree(data: Any) -> RecordTree:
    """
    Check the record tree's shape.

    Only the layout is checked here; per-relationship validation happens in
    the compiler so errors can name the offending record.
    """
    if not isinstance(data, dict):
        raise ParseError("Document root must be a table")

    for key, value in data.items():
        if key == RELATIONSHIPS_KEY:
            if not isinstance(value, list):
                raise ParseError(f"'{RELATIONSHIPS_KEY}' must be an array of tables")
            continue
        if not isinstance(value, dict):
            raise ParseError(
                f"Top-level key '{key}' must be a table, got {type(value).__name__}"
            )
    return data


def _json_props(props: Optional[str], lineno: int) -> Dict[str, Any]:
    if not props:
        return {}
    try:
        return json.loads(props)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid properties: {e.msg}", line=lineno, column=e.colno) from e
