"""Scene module for scene representation and scene-level queries.

Components:
    world: World, the aggregate of spheres queried for the closest hit
    random_scene: Procedural random-spheres scene builder

Scenes are built once, before any ray is cast, and are shared read-only
across all render threads.
"""

from .random_scene import RandomSceneParams, create_random_scene
from .world import World

__all__ = [
    "World",
    "RandomSceneParams",
    "create_random_scene",
]
