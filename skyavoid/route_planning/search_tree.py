"""Mini README: Parent-pointer search tree used by the RRT engine.

Structure:
    * TreeNode - immutable node with an integer handle and optional parent handle.
    * SearchTree - arena owning every node plus the spatial index over them.

Nodes are appended only. A node's parent handle is fixed when it is created
and must refer to a node that already exists, so the structure is always a
rooted arborescence with the root at handle ``0``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional

from ..geo import GeoPoint
from .spatial_index import GeoKDTree


@dataclass(frozen=True, slots=True)
class TreeNode:
    """Single vertex of the search tree."""

    handle: int
    point: GeoPoint
    parent: Optional[int] = None

    @property
    def is_root(self) -> bool:
        return self.parent is None


class SearchTree:
    """Append-only arena of ``TreeNode`` objects with nearest-node lookup."""

    def __init__(self, root_point: GeoPoint) -> None:
        self._nodes: List[TreeNode] = []
        self._index: GeoKDTree[TreeNode] = GeoKDTree()
        self._append(root_point, None)

    def _append(self, point: GeoPoint, parent: Optional[int]) -> TreeNode:
        node = TreeNode(handle=len(self._nodes), point=point, parent=parent)
        self._nodes.append(node)
        self._index.insert(point, node)
        return node

    @property
    def root(self) -> TreeNode:
        return self._nodes[0]

    def add(self, point: GeoPoint, parent: TreeNode) -> TreeNode:
        """Insert ``point`` as a child of ``parent`` and return the new node."""

        if not 0 <= parent.handle < len(self._nodes) or self._nodes[parent.handle] is not parent:
            raise ValueError(f"Parent node {parent.handle} does not belong to this tree")
        return self._append(point, parent.handle)

    def node(self, handle: int) -> TreeNode:
        """Look up a node by its handle."""

        return self._nodes[handle]

    def parent_of(self, node: TreeNode) -> Optional[TreeNode]:
        if node.parent is None:
            return None
        return self._nodes[node.parent]

    def nearest_to(self, point: GeoPoint) -> TreeNode:
        """Return the node closest to ``point`` by great-circle distance."""

        return self._index.nearest(point)

    def path_to_root(self, node: TreeNode) -> List[GeoPoint]:
        """Points from the root down to ``node`` inclusive, root first."""

        points: List[GeoPoint] = []
        current: Optional[TreeNode] = node
        while current is not None:
            points.append(current.point)
            current = self.parent_of(current)
        points.reverse()
        return points

    def size(self) -> int:
        return len(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[TreeNode]:
        return iter(self._nodes)
