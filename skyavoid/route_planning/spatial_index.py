"""Mini README: Dynamic 2-D k-d tree over geographic coordinates.

Structure:
    * GeoKDTree - insert/nearest/contains_exact index keyed by ``GeoPoint``.

Points are split alternately on longitude and latitude. Nearest-neighbour
queries rank candidates by haversine distance, so the far side of a split is
only skipped when a great-circle lower bound proves it cannot hold a closer
point:

    * latitude split - any point across it is at least the meridional arc
      between the query latitude and the split latitude away;
    * longitude split - the far region is bounded by the split meridian and
      the antimeridian, so the smaller distance to either half-meridian is a
      valid bound.

Ties are broken by insertion order (earliest wins), making results identical
to a brute-force ``min`` over ``(distance, insertion order)``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

from ..geo import EARTH_RADIUS_M, GeoPoint, distance_m

V = TypeVar("V")

_LONGITUDE_AXIS = 0
_LATITUDE_AXIS = 1
# Shrinks lower bounds slightly so float noise never prunes an equal-distance point.
_BOUND_SLACK = 1e-9


@dataclass(slots=True)
class _KDNode(Generic[V]):
    point: GeoPoint
    value: V
    order: int
    axis: int
    left: Optional["_KDNode[V]"] = None
    right: Optional["_KDNode[V]"] = None

    def split_value(self) -> float:
        return self.point.longitude if self.axis == _LONGITUDE_AXIS else self.point.latitude


def _coordinate(point: GeoPoint, axis: int) -> float:
    return point.longitude if axis == _LONGITUDE_AXIS else point.latitude


def _half_meridian_angle(point: GeoPoint, meridian: float) -> float:
    """Angular distance (radians) from ``point`` to the half-meridian at ``meridian``."""

    delta = abs((point.longitude - meridian + 180.0) % 360.0 - 180.0)
    if delta <= 90.0:
        value = math.cos(math.radians(point.latitude)) * math.sin(math.radians(delta))
        return math.asin(min(1.0, abs(value)))
    # The closest point of a half-meridian more than 90 degrees away is a pole.
    return math.radians(90.0 - abs(point.latitude))


def _split_lower_bound(query: GeoPoint, node: _KDNode) -> float:
    """Minimum great-circle distance from ``query`` to the far side of ``node``'s split."""

    if node.axis == _LATITUDE_AXIS:
        angle = abs(math.radians(query.latitude - node.point.latitude))
    else:
        angle = min(
            _half_meridian_angle(query, node.point.longitude),
            _half_meridian_angle(query, 180.0),
        )
    return max(0.0, EARTH_RADIUS_M * angle * (1.0 - _BOUND_SLACK) - _BOUND_SLACK)


class GeoKDTree(Generic[V]):
    """Unbalanced dynamic k-d tree; expected O(log n) for scattered inserts."""

    def __init__(self) -> None:
        self._root: Optional[_KDNode[V]] = None
        self._values: List[V] = []
        self._exact: Dict[Tuple[float, float], V] = {}

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[V]:
        return iter(self._values)

    def insert(self, point: GeoPoint, value: V) -> None:
        """Associate ``value`` with ``point``."""

        order = len(self._values)
        self._values.append(value)
        self._exact.setdefault(point.as_tuple(), value)

        if self._root is None:
            self._root = _KDNode(point=point, value=value, order=order, axis=_LONGITUDE_AXIS)
            return

        current = self._root
        while True:
            go_left = _coordinate(point, current.axis) < current.split_value()
            child = current.left if go_left else current.right
            if child is None:
                new_node = _KDNode(point=point, value=value, order=order, axis=1 - current.axis)
                if go_left:
                    current.left = new_node
                else:
                    current.right = new_node
                return
            current = child

    def contains_exact(self, point: GeoPoint) -> bool:
        """Return ``True`` when a value was inserted at exactly these coordinates."""

        return point.as_tuple() in self._exact

    def nearest(self, point: GeoPoint) -> V:
        """Return the value stored closest to ``point``."""

        key = point.as_tuple()
        if key in self._exact:
            return self._exact[key]
        return self.nearest_with_distance(point)[0]

    def nearest_with_distance(self, point: GeoPoint) -> Tuple[V, float]:
        """Return ``(value, distance_m)`` of the closest stored point."""

        if self._root is None:
            raise LookupError("Cannot query an empty spatial index")

        best_node: Optional[_KDNode[V]] = None
        best_distance = math.inf
        # Explicit stack: tree depth follows insertion order and can exceed the recursion limit.
        stack: List[Tuple[_KDNode[V], float]] = [(self._root, 0.0)]
        while stack:
            node, bound = stack.pop()
            if bound > best_distance:
                continue

            node_distance = distance_m(point, node.point)
            if best_node is None or (node_distance, node.order) < (best_distance, best_node.order):
                best_node = node
                best_distance = node_distance

            if _coordinate(point, node.axis) < node.split_value():
                near, far = node.left, node.right
            else:
                near, far = node.right, node.left
            if far is not None:
                stack.append((far, max(bound, _split_lower_bound(point, node))))
            if near is not None:
                stack.append((near, bound))

        assert best_node is not None
        return best_node.value, best_distance
