"""Navigation tree of groups and items.

Stores nodes in a flat arena with parent/children relationships tracked by
indices, the same way for every depth. Top-level nodes have no parent and
hang off the implicit root group.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from docnav.core.errors import DepthExceededError
from docnav.core.registry import SlugRegistry
from docnav.core.types import NodeId, Slug

# Top-level group, nested group, items
DEFAULT_MAX_DEPTH = 3


class NodeKind(Enum):
    GROUP = "group"
    ITEM = "item"


@dataclass(frozen=True)
class Node:
    """Navigation node data."""

    id: NodeId
    kind: NodeKind
    label: str
    slug: Slug | None = None

    @property
    def is_group(self) -> bool:
        return self.kind is NodeKind.GROUP


class NavTree:
    """Ordered hierarchy of navigation groups and items.

    Immutable once built. Provides O(1) node and slug lookups and
    O(n) traversal.
    """

    __slots__ = ("_children", "_depths", "_max_depth", "_nodes", "_parents", "_roots", "_slug_index")

    def __init__(
        self,
        nodes: list[Node],
        children: list[list[NodeId]],
        parents: list[NodeId | None],
        roots: list[NodeId],
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        """Initialize tree structure.

        The constructor does not enforce slug uniqueness or depth; use
        NavTreeBuilder for checked construction and the validator for
        trees assembled by other means.

        Args:
            nodes: Flat list of all nodes, indexed by NodeId
            children: Children ids for each node
            parents: Parent id for each node (None for top-level nodes)
            roots: Ids of top-level nodes
            max_depth: Nesting bound the tree was built with
        """
        self._nodes = nodes
        self._children = children
        self._parents = parents
        self._roots = roots
        self._max_depth = max_depth
        self._depths = self._compute_depths()
        self._slug_index: dict[Slug, NodeId] = {}
        for node in nodes:
            if node.slug is not None:
                self._slug_index.setdefault(node.slug, node.id)

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def node(self, node_id: NodeId) -> Node:
        """Get node by id.

        Raises:
            KeyError: If the id is not part of this tree
        """
        if not self.contains(node_id):
            raise KeyError(node_id)
        return self._nodes[node_id]

    def contains(self, node_id: int) -> bool:
        return 0 <= node_id < len(self._nodes)

    def children(self, node_id: NodeId | None = None) -> list[Node]:
        """Get ordered children of a group.

        Args:
            node_id: Group id, None for the top-level nodes

        Returns:
            Children in insertion order, empty for items
        """
        if node_id is None:
            return [self._nodes[i] for i in self._roots]
        return [self._nodes[i] for i in self._children[self.node(node_id).id]]

    def parent(self, node_id: NodeId) -> Node | None:
        parent_id = self._parents[self.node(node_id).id]
        if parent_id is None:
            return None
        return self._nodes[parent_id]

    def depth(self, node_id: NodeId) -> int:
        """Get nesting depth of a node, 1 for top-level nodes."""
        return self._depths[self.node(node_id).id]

    def find_by_slug(self, slug: str) -> Node | None:
        idx = self._slug_index.get(Slug(slug))
        if idx is None:
            return None
        return self._nodes[idx]

    def slugs(self) -> list[Slug]:
        """Get item slugs in traversal order, duplicates included."""
        return [node.slug for node in self.walk() if node.slug is not None]

    def walk(self) -> Iterator[Node]:
        """Traverse the tree depth-first in pre-order.

        Each call returns a fresh generator producing the same sequence.
        """
        stack = list(reversed(self._roots))
        while stack:
            idx = stack.pop()
            yield self._nodes[idx]
            stack.extend(reversed(self._children[idx]))

    def __len__(self) -> int:
        return len(self._nodes)

    def _compute_depths(self) -> list[int]:
        depths = [0] * len(self._nodes)
        stack = [(idx, 1) for idx in self._roots]
        while stack:
            idx, depth = stack.pop()
            depths[idx] = depth
            stack.extend((child, depth + 1) for child in self._children[idx])
        return depths


class NavTreeBuilder:
    """Builder for constructing NavTree instances.

    Slugs are registered as items are added, so a duplicate is rejected at
    the call that introduces it.
    """

    def __init__(
        self,
        registry: SlugRegistry | None = None,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self._registry = registry if registry is not None else SlugRegistry()
        self._max_depth = max_depth
        self._nodes: list[Node] = []
        self._children: list[list[NodeId]] = []
        self._parents: list[NodeId | None] = []
        self._depths: list[int] = []
        self._roots: list[NodeId] = []

    @property
    def registry(self) -> SlugRegistry:
        return self._registry

    def add_group(self, parent: NodeId | None, label: str) -> NodeId:
        """Add a group.

        Args:
            parent: Parent group id, None for top level
            label: Default-locale label

        Returns:
            Id of the added group

        Raises:
            DepthExceededError: If the group would exceed the nesting bound
        """
        depth = self._child_depth(parent)
        return self._append(NodeKind.GROUP, label, None, parent, depth)

    def add_item(self, parent: NodeId | None, label: str, slug: str) -> NodeId:
        """Add an item.

        Args:
            parent: Parent group id, None for top level
            label: Default-locale label
            slug: Canonical content key

        Returns:
            Id of the added item

        Raises:
            DepthExceededError: If the item would exceed the nesting bound
            DuplicateSlugError: If the slug is already registered
        """
        depth = self._child_depth(parent)
        registered = self._registry.register(slug)
        return self._append(NodeKind.ITEM, label, registered, parent, depth)

    def build(self) -> NavTree:
        """Build the NavTree instance."""
        return NavTree(
            nodes=list(self._nodes),
            children=[list(c) for c in self._children],
            parents=list(self._parents),
            roots=list(self._roots),
            max_depth=self._max_depth,
        )

    def _child_depth(self, parent: NodeId | None) -> int:
        if parent is None:
            depth = 1
        else:
            if not 0 <= parent < len(self._nodes):
                raise ValueError(f"Unknown parent node: {parent}")
            if not self._nodes[parent].is_group:
                raise ValueError(f"Parent node {parent} is an item, not a group")
            depth = self._depths[parent] + 1
        if depth > self._max_depth:
            raise DepthExceededError(depth, self._max_depth)
        return depth

    def _append(
        self,
        kind: NodeKind,
        label: str,
        slug: Slug | None,
        parent: NodeId | None,
        depth: int,
    ) -> NodeId:
        idx = NodeId(len(self._nodes))
        self._nodes.append(Node(id=idx, kind=kind, label=label, slug=slug))
        self._children.append([])
        self._parents.append(parent)
        self._depths.append(depth)

        if parent is None:
            self._roots.append(idx)
        else:
            self._children[parent].append(idx)

        return idx
