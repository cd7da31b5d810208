"""Routers package."""

from . import (
    dashboard,
    health,
    ideas,
)
