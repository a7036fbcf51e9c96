"""
Project Document Parser - Parse project.md into configuration and task items.

Expected format::

    backend: github
    repo: owner/name
    ---

    # My Project

    Any prose, headings or unrelated bullets.

    * [#1] - tasks/setup_auth.md - Setup the authentication
    * [new] - tasks/scaffold_ui.md - Scaffold the UI

A leading ``---`` line before the front matter is also accepted.
"""

import logging
import re
from pathlib import Path
from typing import Optional, Union

from ...core.domain.entities import ProjectConfig, ProjectDocument, TaskItem, TaskStatus
from ...core.exceptions import FileAccessError, ParseError
from .frontmatter import SEPARATOR, load_yaml


class ProjectDocumentParser:
    """
    Parser for the project document.

    Lines that look like task bullets must be well formed; every other line
    of the content is ignored.
    """

    # Anything starting like a task bullet is held to the full pattern
    TASK_BULLET_START = re.compile(r"^\s*\*\s*\[(?:new|#[^\]]*)\]")

    # Single-space separators: an accepted bullet always contains "* [new] - <path> -"
    TASK_BULLET = re.compile(
        r"^\s*\* \[(?:new|#(?P<number>[^\]]*))\]"
        r" - (?P<path>\S(?:.*?\S)?)"
        r" - (?P<description>\S.*?)\s*$"
    )

    ISSUE_NUMBER = re.compile(r"[0-9]+")

    def __init__(self):
        self.logger = logging.getLogger("ProjectDocumentParser")

    def parse(self, text: str, source: Optional[str] = None) -> ProjectDocument:
        """
        Parse project document text.

        Args:
            text: Document contents
            source: Optional file name used in error messages

        Returns:
            ProjectDocument with tasks in document order

        Raises:
            ParseError: If the front matter is missing or invalid, or a task
                bullet is malformed
        """
        yaml_text, content, content_line = self._split(text, source)
        config = self._parse_config(yaml_text, source)

        tasks = []
        for offset, line in enumerate(content.splitlines()):
            line_number = content_line + offset
            if not self.TASK_BULLET_START.match(line):
                continue
            tasks.append(self._parse_task_item(line, line_number, source))

        self.logger.debug(f"Parsed {len(tasks)} task(s) from {source or 'project document'}")
        return ProjectDocument(config=config, tasks=tasks)

    def parse_file(self, path: Union[str, Path]) -> ProjectDocument:
        """Read and parse a project document from disk."""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8-sig")
        except OSError as e:
            raise FileAccessError(f"Failed to read project file {path}: {e}", path=path, cause=e) from e
        return self.parse(text, source=str(path))

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _split(self, text: str, source: Optional[str]) -> tuple[str, str, int]:
        """Return (yaml_text, content, first content line number)."""
        separators = SEPARATOR.finditer(text)
        first = next(separators, None)
        if first is None:
            raise ParseError("Missing YAML front matter: no '---' separator line", source=source)

        yaml_start = 0
        closing = first
        if not text[:first.start()].strip():
            # Leading '---' form: the block runs to the next separator
            closing = next(separators, None)
            if closing is None:
                raise ParseError("Missing closing '---' after YAML front matter", source=source)
            yaml_start = first.end()

        content_start = closing.end()
        if text.startswith("\n", content_start):
            content_start += 1

        yaml_text = text[yaml_start:closing.start()]
        if not yaml_text.strip():
            raise ParseError("Missing YAML front matter: block is empty", source=source)

        content_line = text.count("\n", 0, content_start) + 1
        return yaml_text, text[content_start:], content_line

    def _parse_config(self, yaml_text: str, source: Optional[str]) -> ProjectConfig:
        data = load_yaml(yaml_text, source=source)
        try:
            return ProjectConfig.from_dict(data)
        except KeyError as e:
            raise ParseError(f"Missing required front matter key: {e.args[0]}", source=source, cause=e) from e
        except TypeError as e:
            raise ParseError(f"Invalid front matter: {e}", source=source, cause=e) from e

    def _parse_task_item(self, line: str, line_number: int, source: Optional[str]) -> TaskItem:
        match = self.TASK_BULLET.match(line)
        if not match:
            raise ParseError(
                f"Malformed task item, expected '* [new|#N] - <path> - <description>': {line.strip()}",
                line=line_number,
                source=source,
            )

        number = match.group("number")
        if number is None:
            status = TaskStatus.new()
        else:
            number = number.strip()
            if not self.ISSUE_NUMBER.fullmatch(number) or int(number) < 1:
                raise ParseError(
                    f"Invalid issue number '#{number}'",
                    line=line_number,
                    source=source,
                )
            status = TaskStatus.existing(int(number))

        return TaskItem(
            status=status,
            path=match.group("path"),
            description=match.group("description"),
            line=line_number,
        )
