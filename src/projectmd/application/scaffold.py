"""
Scaffold - Create a starter project document and example task.
"""

import logging
from pathlib import Path
from typing import Union

from ..adapters.factory import validate_project_config
from ..core.domain.entities import ProjectConfig
from ..core.exceptions import FileAccessError, ProjectMdError
from ..core.ports.config_provider import DEFAULT_PROJECT_FILE


logger = logging.getLogger("Scaffold")


PROJECT_TEMPLATE = """\
backend: {backend}
repo: {repo}
---

# My Project

Project description goes here.

## Tasks

* [new] - tasks/example.md - Example task
"""

EXAMPLE_TASK = """\
---
type: task
tags: [example]
---
# Example task

This is an example task file. Edit this to describe your task.

## Details

You can use full markdown here to describe:
- What needs to be done
- Why it's important
- Any technical details

When you run `projectmd sync`, this will be created as an issue in your backend.
"""


def init_project(
    directory: Union[str, Path],
    backend: str,
    repo: str,
) -> list[Path]:
    """
    Write project.md and tasks/example.md into a directory.

    Args:
        directory: Target directory
        backend: Backend identifier (only 'github' is supported)
        repo: Repository in owner/name form

    Returns:
        Paths of the files created

    Raises:
        ConfigError: On an unsupported backend or malformed repo
        ProjectMdError: If project.md already exists
    """
    validate_project_config(ProjectConfig(backend=backend, repo=repo))

    directory = Path(directory)
    project_file = directory / DEFAULT_PROJECT_FILE
    if project_file.exists():
        raise ProjectMdError(f"{project_file} already exists")

    example_task = directory / "tasks" / "example.md"
    created = [project_file]
    try:
        project_file.write_text(PROJECT_TEMPLATE.format(backend=backend, repo=repo), encoding="utf-8")
        example_task.parent.mkdir(parents=True, exist_ok=True)
        if not example_task.exists():
            example_task.write_text(EXAMPLE_TASK, encoding="utf-8")
            created.append(example_task)
    except OSError as e:
        raise FileAccessError(f"Failed to initialize project in {directory}: {e}", path=directory, cause=e) from e

    logger.info(f"Initialized {project_file} for {backend}:{repo}")
    return created
