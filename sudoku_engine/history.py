"""Move history as a tree of board snapshots.

Nodes live in a single table keyed by id; parent and children are id links
into that table. Committing always adds one child of the current node and
moves there, undo and ``restore_to`` only move the cursor, so every branch a
player abandoned stays navigable until pruning drops it. Pruning removes
old leaves that are not on the root-to-current path.
"""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from .board import GameBoard, clone_board, count_filled

log = logging.getLogger(__name__)

MAX_HISTORY_NODES = 100
PRUNE_SLACK = 10


@dataclass
class HistoryNode:
    id: str
    board: GameBoard
    move_count: int
    timestamp: float
    description: str  # e.g. "R3C5 = 7" or "Start"
    parent_id: Optional[str] = None
    children_ids: List[str] = field(default_factory=list)
    filled_count: int = 0


def _new_id() -> str:
    return uuid.uuid4().hex[:12]


class HistoryTree:
    def __init__(self, max_nodes: int = MAX_HISTORY_NODES, prune_slack: int = PRUNE_SLACK):
        if max_nodes < 1:
            raise ValueError("max_nodes must be >= 1")
        self.max_nodes = max_nodes
        self.prune_slack = max(0, prune_slack)
        self.nodes: Dict[str, HistoryNode] = {}
        self.root_id: Optional[str] = None
        self.current_id: Optional[str] = None

    @classmethod
    def from_config(cls, config) -> "HistoryTree":
        return cls(max_nodes=config.history.max_nodes, prune_slack=config.history.prune_slack)

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def root(self) -> Optional[HistoryNode]:
        return self.nodes.get(self.root_id) if self.root_id else None

    @property
    def current(self) -> Optional[HistoryNode]:
        return self.nodes.get(self.current_id) if self.current_id else None

    def _make_node(self, board: GameBoard, move_count: int, description: str,
                   parent_id: Optional[str]) -> HistoryNode:
        node = HistoryNode(
            id=_new_id(),
            board=clone_board(board),
            move_count=move_count,
            timestamp=time.time(),
            description=description,
            parent_id=parent_id,
            filled_count=count_filled(board),
        )
        self.nodes[node.id] = node
        return node

    def start(self, board: GameBoard, description: str = "Start") -> HistoryNode:
        """Drop any previous tree and root a new one at ``board``."""
        self.nodes = {}
        root = self._make_node(board, 0, description, None)
        self.root_id = self.current_id = root.id
        return root

    # PUBLIC_INTERFACE
    def commit(self, board: GameBoard, description: str) -> HistoryNode:
        """Append a snapshot as a new child of the current node and move to it."""
        parent = self.current
        if parent is None:
            raise RuntimeError("history tree has no root; call start() first")
        node = self._make_node(board, parent.move_count + 1, description, parent.id)
        parent.children_ids.append(node.id)
        self.current_id = node.id
        self.prune()
        return node

    # PUBLIC_INTERFACE
    def undo(self) -> Optional[HistoryNode]:
        """Step back to the parent, keeping the undone branch; None at the root."""
        node = self.current
        if node is None or node.parent_id is None:
            return None
        parent = self.nodes.get(node.parent_id)
        if parent is None:
            return None
        self.current_id = parent.id
        return parent

    # PUBLIC_INTERFACE
    def restore_to(self, node_id: str) -> Optional[HistoryNode]:
        """Move the cursor to any existing node; unknown ids are ignored."""
        node = self.nodes.get(node_id)
        if node is None:
            return None
        self.current_id = node.id
        return node

    def path_to(self, node_id: Optional[str] = None) -> List[HistoryNode]:
        """Nodes from the root down to ``node_id`` (default: current)."""
        path: List[HistoryNode] = []
        node = self.nodes.get(node_id or self.current_id or "")
        while node is not None:
            path.append(node)
            node = self.nodes.get(node.parent_id) if node.parent_id else None
        path.reverse()
        return path

    def _path_ids(self) -> Set[str]:
        return {n.id for n in self.path_to()}

    def prune(self) -> int:
        """Drop old off-path leaves once the tree outgrows ``max_nodes``.

        Leaves are taken oldest first; a node whose children are all being
        dropped counts as a leaf too. Returns the number of nodes removed.
        """
        if len(self.nodes) <= self.max_nodes:
            return 0
        keep = self._path_ids()
        if self.root_id:
            keep.add(self.root_id)
        want = len(self.nodes) - self.max_nodes + self.prune_slack
        candidates = sorted(
            (n for n in self.nodes.values() if n.id not in keep),
            key=lambda n: n.timestamp,
        )
        doomed: List[str] = []
        doomed_set: Set[str] = set()
        progress = True
        while len(doomed) < want and progress:
            progress = False
            for node in candidates:
                if len(doomed) >= want:
                    break
                if node.id in doomed_set:
                    continue
                if all(cid in doomed_set for cid in node.children_ids):
                    doomed.append(node.id)
                    doomed_set.add(node.id)
                    progress = True

        for nid in doomed:
            node = self.nodes[nid]
            parent = self.nodes.get(node.parent_id) if node.parent_id else None
            if parent is not None and nid in parent.children_ids:
                parent.children_ids.remove(nid)
            del self.nodes[nid]
        if doomed:
            log.debug("pruned %d history nodes, %d left", len(doomed), len(self.nodes))
        return len(doomed)

    def branch_points(self) -> List[HistoryNode]:
        return [n for n in self.nodes.values() if len(n.children_ids) > 1]
