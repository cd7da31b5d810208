"""Models package."""

from .idea import Idea
