"""Body tree of an SPK file: which body each target is given relative to."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from spk_tools.constants import gm_of
from spk_tools.spk.index import spk_segments
from spk_tools.spk.names import body_code_to_string, frame_id_to_name


@dataclass
class BodyNode:
    """One body of the tree and its links."""

    body_id: int
    name: str
    center_id: int
    frame_name: str
    parent: BodyNode | None = field(default=None, repr=False)
    children: list[BodyNode] = field(default_factory=list, repr=False)

    @property
    def gm(self) -> float | None:
        """Gravitational parameter in km^3/s^2, if tabulated."""
        return gm_of(self.body_id)


def build_body_tree(path: str | os.PathLike[str]) -> dict[int, BodyNode]:
    """Return the bodies of an SPK file keyed by NAIF ID, linked parent to child.

    A target's center is taken from its last segment in the file. The root
    (the center that is never a target, normally the solar system barycenter)
    is added as its own node with itself as center and an empty frame name.
    """
    tree: dict[int, BodyNode] = {}
    for info in spk_segments(path):
        summary = info.summary
        tree[summary.target] = BodyNode(
            summary.target,
            body_code_to_string(summary.target),
            summary.center,
            frame_id_to_name(summary.frame) or str(summary.frame),
        )
    if not tree:
        return tree

    root = root_body_id(tree)
    if root not in tree:
        tree[root] = BodyNode(root, body_code_to_string(root), root, '')
    for node in tree.values():
        if node.center_id == node.body_id:
            continue
        parent = tree.get(node.center_id)
        if parent is None:
            # Center outside this file's tree.
            continue
        node.parent = parent
        parent.children.append(node)
    for node in tree.values():
        node.children.sort(key=lambda child: child.body_id)
    return tree


def root_body_id(tree: dict[int, BodyNode]) -> int:
    """Follow centers up from the first body until reaching a body with no node.

    Returns 0 for an empty tree.
    """
    if not tree:
        return 0
    node = next(iter(tree.values()))
    seen = {node.body_id}
    while node.center_id in tree and node.center_id != node.body_id:
        node = tree[node.center_id]
        if node.body_id in seen:
            break
        seen.add(node.body_id)
    return node.center_id
