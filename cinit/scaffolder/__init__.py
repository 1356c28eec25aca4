"""cinit scaffolder -- lays down a minimal Make-based C project.

Quick usage::

    from cinit.scaffolder import ProjectConfig, ProjectGenerator

    generator = ProjectGenerator(ProjectConfig(name="hello"))
    await generator.create_directories()
    await generator.write_makefile()
    await generator.write_source()
"""

from cinit.scaffolder.generator import (
    MAX_PROJECT_NAME_LENGTH,
    ProjectConfig,
    ProjectGenerator,
    ScaffoldError,
)
from cinit.scaffolder.templates import TemplateRenderer

__all__ = [
    "MAX_PROJECT_NAME_LENGTH",
    "ProjectConfig",
    "ProjectGenerator",
    "ScaffoldError",
    "TemplateRenderer",
]
