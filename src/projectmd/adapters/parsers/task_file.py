"""
Task File Parser - Parse task files into metadata, title and body.

Expected format::

    ---
    issue_id: 1
    type: bug
    tags: [chore, infra]
    created_at: 2025-01-15T10:30:00Z
    updated_at: 2025-01-20T15:45:32Z
    ---
    # Setup the authentication

    Some details go here.

Keys other than the known ones are kept verbatim and written back on every
rewrite.
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from ...core.domain.entities import TaskFile, TaskFileConfig
from ...core.exceptions import FileAccessError, ParseError
from .frontmatter import load_yaml, render_front_matter, split_front_matter


class TaskFileParser:
    """Parser and front matter rewriter for task files."""

    TITLE_MARKER = "# "

    def __init__(self):
        self.logger = logging.getLogger("TaskFileParser")

    def parse(self, text: str, source: Optional[str] = None) -> TaskFile:
        """
        Parse task file text.

        Args:
            text: File contents
            source: Optional file name used in error messages

        Returns:
            TaskFile with config, title and trimmed body

        Raises:
            ParseError: If the front matter is missing or invalid
        """
        split = split_front_matter(text, source=source)
        config = self.parse_config(split.yaml_text, source=source)
        title, body = self._extract_title_and_body(split.body)
        if not title:
            self.logger.debug(f"No '# ' title line in {source or 'task file'}")
        return TaskFile(config=config, title=title, body=body)

    def parse_file(self, path: Union[str, Path]) -> TaskFile:
        """Read and parse a task file from disk."""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8-sig")
        except OSError as e:
            raise FileAccessError(f"Failed to read task file {path}: {e}", path=path, cause=e) from e
        return self.parse(text, source=str(path))

    def parse_config(self, yaml_text: str, source: Optional[str] = None) -> TaskFileConfig:
        """Load a front matter block as TaskFileConfig."""
        data = load_yaml(yaml_text, source=source, line_offset=1)
        try:
            return TaskFileConfig.from_dict(data)
        except (TypeError, ValueError) as e:
            raise ParseError(f"Invalid task file front matter: {e}", source=source, cause=e) from e

    def rewrite(
        self,
        text: str,
        mutate: Callable[[TaskFileConfig], None],
        source: Optional[str] = None,
    ) -> str:
        """
        Apply a change to the front matter and rebuild the file.

        Only the front matter block changes; the body after the closing
        separator is carried over byte for byte.

        Args:
            text: Current file contents
            mutate: Callback that edits the config in place
            source: Optional file name used in error messages

        Returns:
            New file contents
        """
        split = split_front_matter(text, source=source)
        config = self.parse_config(split.yaml_text, source=source)
        mutate(config)
        return render_front_matter(config.to_dict(), split.body)

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _extract_title_and_body(self, markdown: str) -> tuple[str, str]:
        """First '# ' heading is the title; what follows it is the body."""
        lines = markdown.splitlines()

        for index, line in enumerate(lines):
            stripped = line.strip()
            if stripped.startswith(self.TITLE_MARKER):
                title = stripped[len(self.TITLE_MARKER):].strip()
                return title, _trim_blank_lines(lines[index + 1:])

        return "", _trim_blank_lines(lines)


def _trim_blank_lines(lines: list[str]) -> str:
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return "\n".join(lines[start:end])
