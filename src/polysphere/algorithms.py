from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple, Union

from .models import Face, Tile


def build_tile_adjacency(faces: Iterable[Face], vertex_count: int) -> Tuple[Tuple[int, ...], ...]:
    """Return tile adjacency based purely on shared mesh edges.

    Tile *k* is the dual of mesh vertex *k*; two tiles are neighbours
    iff their vertices share a face.  One pass over *faces*.
    """
    neighbors: List[set[int]] = [set() for _ in range(vertex_count)]
    for face in faces:
        for a, b in face.edges():
            neighbors[a].add(b)
            neighbors[b].add(a)
    return tuple(tuple(sorted(neigh)) for neigh in neighbors)


def adjacency_map(tiles: Iterable[Tile]) -> Dict[int, List[int]]:
    """Return ``{tile_id: [neighbour ids]}`` from the tiles' own neighbour ids."""
    return {tile.id: list(tile.neighbor_ids) for tile in tiles}


AdjacencyLike = Union[Sequence[Sequence[int]], Mapping[int, Sequence[int]]]


def _neighbors_of(adjacency: AdjacencyLike, tile_id: int) -> Sequence[int]:
    if isinstance(adjacency, Mapping):
        return adjacency.get(tile_id, ())
    return adjacency[tile_id]


def ring_tiles(adjacency: AdjacencyLike, start_tile_id: int, max_depth: int) -> Dict[int, List[int]]:
    """Tiles grouped by hop distance from *start_tile_id*, up to *max_depth*.

    *adjacency* is the per-tile table from :func:`build_tile_adjacency`
    or a ``{tile_id: neighbours}`` mapping; a tile missing from a mapping
    has no neighbours.  Each ring is sorted and empty rings are left
    out, so the keys stop at the farthest reachable depth.
    """
    if max_depth < 0:
        raise ValueError("max_depth must be >= 0")

    depth_of = {start_tile_id: 0}
    queue = deque([start_tile_id])
    while queue:
        tile_id = queue.popleft()
        depth = depth_of[tile_id]
        if depth == max_depth:
            continue
        for neighbor in _neighbors_of(adjacency, tile_id):
            if neighbor not in depth_of:
                depth_of[neighbor] = depth + 1
                queue.append(neighbor)

    rings: Dict[int, List[int]] = {}
    for tile_id, depth in depth_of.items():
        rings.setdefault(depth, []).append(tile_id)
    return {depth: sorted(ids) for depth, ids in sorted(rings.items())}


def shared_corners(tile_a: Tile, tile_b: Tile) -> Tuple[int, ...]:
    """Corner ids on the edge between two tiles (empty if not adjacent)."""
    other = set(tile_b.corner_ids)
    return tuple(cid for cid in tile_a.corner_ids if cid in other)
