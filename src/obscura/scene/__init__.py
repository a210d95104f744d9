"""Scene container, nearest-hit search and scene file loading."""

from obscura.scene.intersection import find_nearest
from obscura.scene.manager import Scene

__all__ = ["Scene", "find_nearest"]
