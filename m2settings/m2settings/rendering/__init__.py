from .customizers import (
    EnvironmentCustomizer,
    TemplateCustomizer,
    UserTokenCustomizer,
    apply_customizers,
    default_customizers,
)
from .interpolator import END_EXPR, START_EXPR, Interpolator, UnresolvedPolicy, interpolate
from .io import backup_file, write_output, write_text

__all__ = [
    "END_EXPR",
    "START_EXPR",
    "EnvironmentCustomizer",
    "Interpolator",
    "TemplateCustomizer",
    "UnresolvedPolicy",
    "UserTokenCustomizer",
    "apply_customizers",
    "backup_file",
    "default_customizers",
    "interpolate",
    "write_output",
    "write_text",
]
