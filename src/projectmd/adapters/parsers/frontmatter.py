"""
Front Matter - Split, load and render YAML front matter blocks.

A front matter block is delimited by lines consisting solely of ``---``::

    ---
    issue_id: 7
    tags: [chore]
    ---
    # Title

Everything after the closing separator line is the body and is never
modified by a metadata rewrite.
"""

import re
from dataclasses import dataclass
from typing import Any, Optional

import yaml

from ...core.exceptions import ParseError


SEPARATOR = re.compile(r"^---[ \t]*\r?$", re.MULTILINE)

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


def _without_timestamps(resolvers: dict) -> dict:
    return {
        first: [(tag, regexp) for tag, regexp in entries if tag != _TIMESTAMP_TAG]
        for first, entries in resolvers.items()
    }


class FrontMatterLoader(yaml.SafeLoader):
    """Safe loader that keeps timestamps and dates as the text that was written."""

    yaml_implicit_resolvers = _without_timestamps(yaml.SafeLoader.yaml_implicit_resolvers)


class FrontMatterDumper(yaml.SafeDumper):
    """Safe dumper matching FrontMatterLoader, so date-like strings stay unquoted."""

    yaml_implicit_resolvers = _without_timestamps(yaml.SafeDumper.yaml_implicit_resolvers)


@dataclass
class FrontMatterSplit:
    """A document cut at its front matter separators."""

    yaml_text: str
    body: str
    body_line: int  # 1-indexed line where the body starts


def split_front_matter(text: str, source: Optional[str] = None) -> FrontMatterSplit:
    """
    Split text on the first two separator lines.

    Raises:
        ParseError: If fewer than two separator lines exist
    """
    separators = []
    for match in SEPARATOR.finditer(text):
        separators.append(match)
        if len(separators) == 2:
            break

    if len(separators) < 2:
        raise ParseError(
            "Missing YAML front matter: expected two '---' separator lines",
            source=source,
        )

    opening, closing = separators
    body_start = _after_line(text, closing.end())

    return FrontMatterSplit(
        yaml_text=text[_after_line(text, opening.end()):closing.start()],
        body=text[body_start:],
        body_line=text.count("\n", 0, body_start) + 1,
    )


def load_yaml(yaml_text: str, source: Optional[str] = None, line_offset: int = 0) -> dict[str, Any]:
    """
    Load a front matter block into a mapping.

    An empty block loads as an empty mapping.

    Raises:
        ParseError: On malformed YAML or a block that is not a mapping
    """
    try:
        data = yaml.load(yaml_text, Loader=FrontMatterLoader)
    except yaml.YAMLError as e:
        line = None
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            line = mark.line + 1 + line_offset
        raise ParseError(f"Malformed YAML front matter: {e}", line=line, source=source, cause=e) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ParseError(
            f"YAML front matter must be a mapping, got {type(data).__name__}",
            source=source,
        )
    return data


def dump_yaml(data: dict[str, Any]) -> str:
    """Serialize a mapping as a front matter block (always newline-terminated)."""
    return yaml.dump(
        data,
        Dumper=FrontMatterDumper,
        default_flow_style=None,
        sort_keys=False,
        allow_unicode=True,
    )


def render_front_matter(data: dict[str, Any], body: str) -> str:
    """Rebuild a document from metadata and an untouched body."""
    return f"---\n{dump_yaml(data)}---\n{body}"


def _after_line(text: str, index: int) -> int:
    """Index just past the line break that ends the line containing index."""
    if text.startswith("\r\n", index):
        return index + 2
    if text.startswith("\n", index):
        return index + 1
    return index
