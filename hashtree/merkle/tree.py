"""
Merkle Tree
Binary hash tree over an ordered list of raw blocks.

This module provides:
- Block ingestion with duplicate-last leaf padding
- All-at-once, bottom-up level generation
- Root retrieval
- Path verification from a leaf up to the root
- Structural verification down one right-preferred path
- Proof lookup by leaf index or raw block value

Construction Rules:
1. Leaf digest: H(raw)
2. Parent digest: H(left || right), no delimiter
3. Leaf padding: after each ingestion batch an odd leaf count is evened
   out by listing the last leaf again (same node, not a new one)
4. Level padding: an odd trailing node is paired with itself
5. Levels are ordered root first; the last level is the leaf level

Nodes live in a flat arena and refer to children by index, since a
self-paired node is referenced from both child slots of its parent.
The tree is not thread-safe; callers serialize shared access.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from hashtree.config.runtime import TreeConfig, get_default_config
from hashtree.crypto.hashing import DigestFunction, DigestLike, hash_concat, resolve_digest
from hashtree.merkle.diagnostics import NodePosition, ProofFailure, ProofReport
from hashtree.merkle.height import tree_height
from hashtree.merkle.merkle_proofs import MerkleProof
from hashtree.merkle.node import Level, Node
from hashtree.merkle.selectors import ByIndex, ProofSelector, as_selector
from hashtree.schemas.errors import (
    EmptyTreeException,
    ProofLookupException,
    TreeNotGeneratedException,
)

logger = logging.getLogger(__name__)


class MerkleTree:
    """
    Merkle tree over raw byte blocks.

    Usage:
        tree = MerkleTree("sha256", [b"a", b"b", b"c"])
        tree.generate()

        tree.root_digest()
        tree.verify_tree()
        tree.verify_proof(ByIndex(0))
        tree.verify_proof(ByValue(b"c"))
    """

    def __init__(self, digest: DigestLike, blocks: Optional[Iterable[bytes]] = None) -> None:
        """
        Args:
            digest: hashlib algorithm name, hash object or bytes -> bytes callable
            blocks: Initial blocks, ingested via append_blocks()

        Raises:
            InvalidDigestFunctionException: If the digest is unusable
        """
        self._digest: DigestFunction = resolve_digest(digest)
        self._blocks: list[bytes] = []
        self._nodes: list[Node] = []
        self._leaves: Level = []
        # leaf position holding each block, parallel to _blocks
        self._block_leaves: list[int] = []
        self._levels: list[Level] = []

        if blocks is not None:
            self.append_blocks(blocks)

    @classmethod
    def new(cls, digest: DigestLike, blocks: Optional[Iterable[bytes]] = None) -> "MerkleTree":
        return cls(digest, blocks)

    @classmethod
    def from_config(
        cls,
        blocks: Optional[Iterable[bytes]] = None,
        config: Optional[TreeConfig] = None,
    ) -> "MerkleTree":
        """Build a tree using the digest algorithm named in the configuration."""
        config = config or get_default_config()
        return cls(config.digest.algorithm, blocks)

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    @property
    def digest(self) -> DigestFunction:
        return self._digest

    @property
    def blocks(self) -> list[bytes]:
        return list(self._blocks)

    @property
    def leaves(self) -> list[Node]:
        """Leaf nodes in order, including the padding duplicate."""
        return [self._nodes[i] for i in self._leaves]

    @property
    def leaf_count(self) -> int:
        return len(self._leaves)

    @property
    def levels(self) -> list[list[Node]]:
        """Generated levels, root level first."""
        return [[self._nodes[i] for i in level] for level in self._levels]

    @property
    def height(self) -> int:
        """Number of generated levels (0 before generation)."""
        return len(self._levels)

    def node_at(self, depth: int, index: int) -> Node:
        """
        Raises:
            IndexError: If the position is outside the generated levels
        """
        if not 0 <= depth < len(self._levels) or not 0 <= index < len(self._levels[depth]):
            raise IndexError(f"No node at depth {depth}, index {index}")
        return self._nodes[self._levels[depth][index]]

    def children(self, node: Node) -> Optional[tuple[Node, Node]]:
        """(left, right) child nodes, or None for a leaf."""
        if node.left is None or node.right is None:
            return None
        return self._nodes[node.left], self._nodes[node.right]

    # -------------------------------------------------------------------------
    # Ingestion and generation
    # -------------------------------------------------------------------------

    def _add_node(self, node: Node) -> int:
        self._nodes.append(node)
        return len(self._nodes) - 1

    def append_blocks(self, blocks: Iterable[bytes]) -> None:
        """
        Append raw blocks and their leaves. Does not regenerate the tree.

        Empty blocks are allowed. If the leaf count ends up odd, the last
        leaf is listed a second time. The batch is validated as a whole;
        a rejected batch leaves the tree unchanged.

        Raises:
            TypeError: If blocks is itself bytes-like, or any block is not
                bytes, bytearray or memoryview
        """
        if isinstance(blocks, (bytes, bytearray, memoryview)):
            raise TypeError("append_blocks() expects an iterable of blocks, not a single bytes object")

        batch: list[bytes] = []
        for block in blocks:
            if not isinstance(block, (bytes, bytearray, memoryview)):
                raise TypeError(f"Block must be bytes-like, got {type(block).__name__}")
            batch.append(bytes(block))

        leaves = [Node.leaf(raw, self._digest(raw)) for raw in batch]

        for raw, leaf in zip(batch, leaves):
            self._blocks.append(raw)
            self._block_leaves.append(len(self._leaves))
            self._leaves.append(self._add_node(leaf))

        if len(self._leaves) % 2 == 1:
            self._leaves.append(self._leaves[-1])

        logger.debug(f"Appended {len(batch)} blocks, {len(self._leaves)} leaves")

    def _compact_arena(self) -> None:
        """Drop internal nodes from earlier generations, keeping leaf order."""
        remap: dict[int, int] = {}
        nodes: list[Node] = []
        for arena_index in self._leaves:
            if arena_index not in remap:
                remap[arena_index] = len(nodes)
                nodes.append(self._nodes[arena_index])
        self._nodes = nodes
        self._leaves = [remap[i] for i in self._leaves]

    def _build_level(self, nodes: Level) -> Level:
        """Pair adjacent nodes into parents; an odd last node pairs with itself."""
        parents: Level = []
        for i in range(0, len(nodes), 2):
            left = nodes[i]
            right = nodes[i + 1] if i + 1 < len(nodes) else left
            digest = hash_concat(self._digest, self._nodes[left].digest, self._nodes[right].digest)
            parents.append(self._add_node(Node.internal(left, right, digest)))
        return parents

    def generate(self) -> None:
        """
        Rebuild every level from the current leaves.

        Raises:
            EmptyTreeException: If no blocks were ingested; the tree
                is left unchanged
        """
        if not self._blocks:
            raise EmptyTreeException()

        self._compact_arena()

        height = tree_height(len(self._blocks))
        slots: list[Optional[Level]] = [None] * height
        slots[-1] = list(self._leaves)

        depth = height - 1
        current = slots[-1]
        while len(current) > 1:
            current = self._build_level(current)
            if depth == 0:
                slots.insert(0, None)
                depth = 1
            depth -= 1
            slots[depth] = current

        built = len(slots) - depth
        if built != height:
            logger.debug(
                f"Height formula gave {height} slots for {len(self._blocks)} blocks, "
                f"built {built} levels"
            )

        self._levels = slots[depth:]
        logger.debug(f"Generated tree: {len(self._levels)} levels, {len(self._nodes)} nodes")

    def root(self) -> Optional[Node]:
        """The single node at level 0, or None before generation."""
        if not self._levels:
            return None
        return self._nodes[self._levels[0][0]]

    def root_digest(self) -> Optional[bytes]:
        root = self.root()
        return root.digest if root is not None else None

    # -------------------------------------------------------------------------
    # Structural verification
    # -------------------------------------------------------------------------

    def _recompute(self, node: Node) -> bytes:
        if node.is_leaf:
            return self._digest(node.raw if node.raw is not None else b"")
        return hash_concat(
            self._digest,
            self._nodes[node.left].digest,
            self._nodes[node.right].digest,
        )

    def verify_node(self, node: Node) -> bool:
        """
        Check a node's digest against its children, then descend.

        Only one path is followed: the right child when present, else the
        left. Siblings off that path are not checked, so this is a partial
        check rather than a full audit (see audit_tree()).
        """
        current = node
        while not current.is_leaf:
            if current.left is None or current.right is None:
                return False
            if self._recompute(current) != current.digest:
                logger.debug(f"Structural check failed at {current!r}")
                return False
            current = self._nodes[current.right]
        return True

    def verify_tree(self) -> bool:
        """verify_node() from the root; False before generation."""
        root = self.root()
        if root is None:
            return False
        return self.verify_node(root)

    def audit_tree(self) -> list[NodePosition]:
        """
        Recompute every node of every level.

        Returns:
            Positions whose stored digest does not match; empty when clean
            or before generation. A duplicated leaf is reported at each
            position it occupies.
        """
        mismatches: list[NodePosition] = []
        for depth, level in enumerate(self._levels):
            for index, arena_index in enumerate(level):
                node = self._nodes[arena_index]
                if self._recompute(node) != node.digest:
                    mismatches.append(NodePosition(depth, index))
        if mismatches:
            logger.debug(f"Audit found {len(mismatches)} mismatched nodes")
        return mismatches

    # -------------------------------------------------------------------------
    # Path verification
    # -------------------------------------------------------------------------

    def _walk_path(self, node: Node, depth: int, index: int) -> ProofReport:
        start_index = index
        if not 0 <= depth < len(self._levels) or not 0 <= index < len(self._levels[depth]):
            return ProofReport.failed(ProofFailure.INDEX_OUT_OF_RANGE, leaf_index=start_index)

        current = node
        while depth > 0:
            parent_index = index >> 1
            parent = self._nodes[self._levels[depth - 1][parent_index]]

            if index % 2 == 1:
                candidate = hash_concat(self._digest, self._nodes[parent.left].digest, current.digest)
            else:
                candidate = hash_concat(self._digest, current.digest, self._nodes[parent.right].digest)

            if candidate != parent.digest:
                logger.debug(f"Path from index {start_index} failed at level {depth - 1}")
                return ProofReport.failed(
                    ProofFailure.MISMATCH_AT_LEVEL,
                    leaf_index=start_index,
                    level=depth - 1,
                )

            current, index, depth = parent, parent_index, depth - 1

        return ProofReport.ok(start_index)

    def is_in_tree(self, node: Node, depth: int, index: int) -> bool:
        """
        Walk from a node at (depth, index) up to the root.

        At each step the parent's digest is recomputed from the current node
        and the parent's other child, and compared with the stored digest.
        Nodes off the path are never touched.
        """
        return self._walk_path(node, depth, index).valid

    # -------------------------------------------------------------------------
    # Proof lookup
    # -------------------------------------------------------------------------

    def _locate(self, selector: ProofSelector) -> tuple[Optional[int], Optional[ProofFailure]]:
        """Resolve a selector to a leaf position in the generated leaf level."""
        if isinstance(selector, ByIndex):
            position = selector.index
        else:
            found = -1
            for block_index, block in enumerate(self._blocks):
                if block == selector.block:
                    found = block_index
            if found < 0:
                return None, ProofFailure.BLOCK_NOT_FOUND
            position = self._block_leaves[found]

        if not 0 <= position < len(self._levels[-1]):
            return position, ProofFailure.INDEX_OUT_OF_RANGE
        return position, None

    def explain_proof(self, selector: ProofSelector | Any) -> ProofReport:
        """
        Verify the path for a leaf selected by index or value, with a reason.

        Raises:
            TypeError: If the selector is not an index or bytes
        """
        selector = as_selector(selector)
        if not self._levels:
            return ProofReport.failed(ProofFailure.NOT_GENERATED)

        position, failure = self._locate(selector)
        if failure is not None:
            return ProofReport.failed(failure, leaf_index=position)

        depth = len(self._levels) - 1
        leaf = self._nodes[self._levels[depth][position]]
        return self._walk_path(leaf, depth, position)

    def verify_proof(self, selector: ProofSelector | Any) -> bool:
        """
        Verify a leaf selected by ByIndex(int) or ByValue(bytes).

        By value, the last equal block wins. An unknown block or an index
        outside [0, leaf_count) returns False, as does any digest mismatch
        on the path.
        """
        return self.explain_proof(selector).valid

    def inclusion_proof(self, selector: ProofSelector | Any) -> MerkleProof:
        """
        Extract a detached proof for a leaf selected by index or value.

        Raises:
            TreeNotGeneratedException: If generate() has not run
            ProofLookupException: If the selector matches no leaf
        """
        selector = as_selector(selector)
        if not self._levels:
            raise TreeNotGeneratedException()

        position, failure = self._locate(selector)
        if failure is ProofFailure.BLOCK_NOT_FOUND:
            raise ProofLookupException("Block not found in tree")
        if failure is not None:
            raise ProofLookupException(
                f"Leaf index {position} out of range for {len(self._levels[-1])} leaves",
                leaf_index=position,
            )

        depth = len(self._levels) - 1
        leaf = self._nodes[self._levels[depth][position]]
        siblings: list[bytes] = []
        index = position
        while depth > 0:
            parent = self._nodes[self._levels[depth - 1][index >> 1]]
            sibling = parent.left if index % 2 == 1 else parent.right
            siblings.append(self._nodes[sibling].digest)
            index >>= 1
            depth -= 1

        return MerkleProof(
            leaf=leaf.digest,
            index=position,
            siblings=siblings,
            root=self.root().digest,
        )

    def __repr__(self) -> str:
        return (
            f"MerkleTree(digest={self._digest.name!r}, blocks={len(self._blocks)}, "
            f"leaves={len(self._leaves)}, levels={len(self._levels)})"
        )


__all__ = ["MerkleTree"]
