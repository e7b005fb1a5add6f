"""gen -- template-driven project scaffolder.

Creates a new project directory for C, C++, Java, Rust or Go from a
user-maintained template tree, running each ecosystem's own initialisation
tool where there is one.

Quick usage::

    from gen import Config, ProjectGenerator, parse_kind, parse_language
    from gen.models import ProjectSpec

    spec = ProjectSpec(
        name="demo",
        language=parse_language("rs"),
        kind=parse_kind("bin"),
    )
    ProjectGenerator(spec, Config.from_env()).generate()
"""

from gen.config import Config
from gen.errors import ErrorKind, GenError
from gen.models import Language, ProjectKind, ProjectSpec
from gen.resolver import parse_kind, parse_language
from gen.scaffolder import ProjectGenerator

__version__ = "0.3.0"

__all__ = [
    "Config",
    "ErrorKind",
    "GenError",
    "Language",
    "ProjectGenerator",
    "ProjectKind",
    "ProjectSpec",
    "parse_kind",
    "parse_language",
]
