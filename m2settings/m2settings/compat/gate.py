"""Server compatibility checks."""

from __future__ import annotations

import logging

from ..core.errors import IncompatibleServerError
from ..core.models import ServerStatus
from .versioning import Version, VersionConstraint

logger = logging.getLogger(__name__)

REQUIRED_EDITION = "PRO"

# Allows Nexus 2.3+
VERSION_CONSTRAINT = "[2.3,)"


def check_compatible(
    status: ServerStatus,
    required_edition: str = REQUIRED_EDITION,
    constraint_expr: str = VERSION_CONSTRAINT,
) -> None:
    """Require a specific server edition within a version range.

    Args:
        status: Status reported by the server
        required_edition: Exact (case-sensitive) edition name
        constraint_expr: Version range expression, e.g. ``[2.3,)``

    Raises:
        IncompatibleServerError: If the edition or version does not match
    """
    logger.debug(f"Ensuring compatibility: {status}")

    if status.edition != required_edition:
        raise IncompatibleServerError(
            "edition",
            f"Unsupported Nexus edition: {status.edition}",
            detail=status.edition,
        )

    constraint = VersionConstraint.parse(constraint_expr)
    version = Version(status.version)
    logger.debug(f"Version: {version!r}")

    if not constraint.contains(version):
        logger.error("Incompatible Nexus version detected")
        logger.error(f"Raw version: {status.version}")
        logger.error(f"Detected version: {version!r}")
        logger.error(f"Compatible version constraint: {constraint}")
        raise IncompatibleServerError(
            "version",
            f"Unsupported Nexus version: {status.version}",
            detail=version,
            constraint=constraint,
        )
