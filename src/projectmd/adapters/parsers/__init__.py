"""
Document Parsers - Convert project documents and task files into domain entities.
"""

from .frontmatter import dump_yaml, load_yaml, render_front_matter, split_front_matter
from .project_document import ProjectDocumentParser
from .task_file import TaskFileParser

__all__ = [
    "ProjectDocumentParser",
    "TaskFileParser",
    "dump_yaml",
    "load_yaml",
    "render_front_matter",
    "split_front_matter",
]
