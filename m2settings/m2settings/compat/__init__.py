from .gate import REQUIRED_EDITION, VERSION_CONSTRAINT, check_compatible
from .versioning import (
    InvalidVersionConstraint,
    Version,
    VersionConstraint,
    VersionRange,
)

__all__ = [
    "REQUIRED_EDITION",
    "VERSION_CONSTRAINT",
    "InvalidVersionConstraint",
    "Version",
    "VersionConstraint",
    "VersionRange",
    "check_compatible",
]
