"""
Simple in‑memory store for built BSP trees.

Building a tree is the expensive step; traversals from many eye
positions are cheap.  The scene API therefore builds each submitted
scene once and keeps the resulting :class:`BspTree` here under a
generated ``scene_id`` so later traversal requests can reuse it.

The store is an ``OrderedDict`` with least‑recently‑used eviction:
once more than ``MAX_SCENE_ENTRIES`` trees are held the oldest is
dropped.  Trees are never mutated after construction, so handing the
same instance to concurrent readers is safe; the lock only guards the
dictionary itself.
"""

from __future__ import annotations

import logging
import uuid
from collections import OrderedDict
from threading import RLock
from typing import Optional

from .bsp_tree import BspTree

logger = logging.getLogger(__name__)

_scenes: "OrderedDict[str, BspTree]" = OrderedDict()
_lock = RLock()
# Maximum number of trees retained before the least recently used one
# is evicted.
MAX_SCENE_ENTRIES: int = 32


def put_scene(tree: BspTree) -> str:
    """Store ``tree`` and return its new scene identifier."""
    scene_id = uuid.uuid4().hex
    with _lock:
        _scenes[scene_id] = tree
        _scenes.move_to_end(scene_id)
        if len(_scenes) > MAX_SCENE_ENTRIES:
            evicted, _ = _scenes.popitem(last=False)
            logger.info("Evicted scene %s from store", evicted)
    return scene_id


def get_scene(scene_id: str) -> Optional[BspTree]:
    """Return the stored tree for ``scene_id`` or ``None`` if unknown."""
    with _lock:
        tree = _scenes.get(scene_id)
        if tree is not None:
            _scenes.move_to_end(scene_id)
        return tree


def delete_scene(scene_id: str) -> bool:
    """Remove a scene; returns whether it existed."""
    with _lock:
        return _scenes.pop(scene_id, None) is not None


def clear_scenes() -> None:
    with _lock:
        _scenes.clear()
