"""
Deployment environment tag.
"""

from enum import Enum

DEMO_MARKER = "preview"


class AppEnv(str, Enum):
    """Closed set of deployment environments."""

    PREVIEW_DEV = "preview-dev"
    PREVIEW = "preview"
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        return None

    @property
    def is_demo(self) -> bool:
        """Demo environments never touch the network."""
        return DEMO_MARKER in self.value.lower()
