# -*- coding: utf-8 -*-
"""
Local Flooding Component Tree - Nister-Stewenius linear-time construction.

Floods the image from a seed pixel like water poured into a landscape:
the flood always descends to the lowest reachable pixel first, keeps the
unexplored boundary in a heap ordered by processing key, and keeps the
components under construction on a stack whose keys increase toward the
bottom. Whenever the flood rises to a higher key, the stack is unwound:
components below the new key are sealed and merged into the component
above them, or into a fresh component at the new key.

Unlike the published formulation, the flood is restarted from every
unvisited valid pixel, so images with a validity mask produce a forest.

Attribution
-----------
Algorithm: D. Nister and H. Stewenius, "Linear Time Maximally Stable
Extremal Regions", Computer Vision - ECCV 2008, pp. 183-196, Springer,
2008. See also W. Burger and M.J. Burge, "Digital Image Processing - An
Algorithmic Introduction", 3rd ed., Springer, 2022, Sec. 26.2.3.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import heapq
from typing import Any, Dict, Iterator, List, Optional, Tuple

# COMPTREE internal
from comptree.components.builders._base import ComponentTreeBuilder, TreeAssembler
from comptree.components.component import Component
from comptree.components.pixel_map import PixelMap
from comptree.exceptions import InvariantError
from comptree.image_processing.versioning import processor_tags, processor_version
from comptree.vocabulary import ComponentTreeMethod, ProcessorCategory

# (processing key, open component) entries, keys increasing toward the bottom
_Stack = List[Tuple[int, Component]]


@processor_version('1.0.0')
@processor_tags(
    category=ProcessorCategory.SEGMENTATION,
    description='Component tree by Nister-Stewenius local flooding',
)
class LocalFloodingTreeBuilder(ComponentTreeBuilder):
    """Local flooding component tree construction.

    Boundary heap ties are broken by ascending pixel id, so the result
    is deterministic.
    """

    method = ComponentTreeMethod.LOCAL_FLOODING

    def _build(
        self,
        pixel_map: PixelMap,
        assembler: TreeAssembler,
        kwargs: Dict[str, Any],
    ) -> None:
        keys = pixel_map.keys.tolist()
        visited = [False] * pixel_map.size
        n_valid = pixel_map.n_valid
        done = 0

        for seed in pixel_map.pixel_ids().tolist():
            if visited[seed]:
                continue
            done += self._flood(pixel_map, assembler, seed, keys, visited)
            self._report_progress(kwargs, done / n_valid)

    def _flood(
        self,
        pixel_map: PixelMap,
        assembler: TreeAssembler,
        seed: int,
        keys: List[int],
        visited: List[bool],
    ) -> int:
        """Flood the region reachable from *seed*; return its pixel count."""
        neighbors = pixel_map._iter_neighbors
        # Partially scanned neighbor iterators of pixels returned to the heap
        scans: Dict[int, Iterator[int]] = {}
        boundary: List[Tuple[int, int]] = []
        stack: _Stack = [(keys[seed], assembler.new_component())]
        visited[seed] = True
        count = 0

        p: Optional[int] = seed
        while p is not None:
            scan = scans.pop(p, None) or neighbors(p)
            descending = True
            while descending:
                descending = False
                for q in scan:
                    if visited[q]:
                        continue
                    visited[q] = True
                    if keys[q] >= keys[p]:
                        heapq.heappush(boundary, (keys[q], q))
                    else:
                        # Lower neighbor: park p and descend into q
                        heapq.heappush(boundary, (keys[p], p))
                        scans[p] = scan
                        stack.append((keys[q], assembler.new_component()))
                        p = q
                        scan = neighbors(p)
                        descending = True
                        break

            stack[-1][1].add_pixel(p)
            count += 1

            if boundary:
                key_q, q = heapq.heappop(boundary)
                if key_q > keys[p]:
                    self._unwind(stack, key_q, assembler)
                p = q
            else:
                p = None

        if len(stack) != 1:
            raise InvariantError(
                f"component stack must hold 1 entry after flooding, "
                f"found {len(stack)}"
            )
        key, root = stack.pop()
        assembler.seal(root, key)
        return count

    @staticmethod
    def _unwind(stack: _Stack, key: int, assembler: TreeAssembler) -> None:
        """Seal stacked components below *key* and merge them upward."""
        while key > stack[-1][0]:
            key_1, c1 = stack.pop()
            assembler.seal(c1, key_1)
            if not stack or key < stack[-1][0]:
                c2 = (key, assembler.new_component())
            else:
                c2 = stack.pop()
            c2[1].merge(c1)
            stack.append(c2)
