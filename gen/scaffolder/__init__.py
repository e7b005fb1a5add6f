"""Project materialization: directory layout, template rendering and the
per-language generation pipeline."""

from gen.scaffolder.generator import GenerationResult, GenerationState, ProjectGenerator
from gen.scaffolder.layout import DirectoryMaterializer
from gen.scaffolder.templates import TemplateRenderer

__all__ = [
    "DirectoryMaterializer",
    "GenerationResult",
    "GenerationState",
    "ProjectGenerator",
    "TemplateRenderer",
]
