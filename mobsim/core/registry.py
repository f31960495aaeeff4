from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Sequence, Tuple

from mobsim import logs
from mobsim.core.node import MobileNode
from mobsim.utils.errors import InvalidStateError

if TYPE_CHECKING:
    from mobsim.core.interfaces import Module


class NodeRegistry:
    """
    NodeRegistry (FROZEN)

    The only mutation point of the node set.

    Contract:
      - add_node assigns a fresh identity: 0, 1, 2, ... never reused within a run
      - identities stay resolvable after removal (historical events reference them)
      - membership changes are broadcast to every module, in registration order,
        BEFORE the aggregate statistics are updated
    """

    def __init__(self, modules: Sequence["Module"] | None = None) -> None:
        # shared with SimulationContext.modules, modules registered later are still notified
        self._modules: Sequence["Module"] = modules if modules is not None else []

        self._nodes: Dict[int, MobileNode] = {}
        self._active: List[MobileNode] = []
        self._next_id = 0

        self.node_joins = 0
        self.participation_time = 0.0

    # --------------------------------------------------
    # lifecycle
    # --------------------------------------------------
    def add_node(self, time: float, node: MobileNode) -> int:
        if node.id is not None:
            raise InvalidStateError(f"[NodeRegistry] node {node.id} was already added")

        node.id = self._next_id
        self._next_id += 1
        node.join_time = time
        node.leave_time = None

        self._nodes[node.id] = node
        self._active.append(node)

        for module in self._modules:
            module.add_node(time, node)

        self.node_joins += 1
        logs.debug(f"[NodeRegistry] join node={node.id} t={time}")
        return node.id

    def remove_node(self, time: float, node: MobileNode) -> None:
        if node.id is None or self._nodes.get(node.id) is not node:
            raise InvalidStateError(f"[NodeRegistry] cannot remove a node that was never added: {node!r}")
        if node.leave_time is not None:
            raise InvalidStateError(f"[NodeRegistry] node {node.id} already left at t={node.leave_time}")
        if time < node.join_time:
            raise InvalidStateError(
                f"[NodeRegistry] node {node.id} cannot leave at t={time} before joining at t={node.join_time}"
            )

        node.leave_time = time
        self._active.remove(node)

        for module in self._modules:
            module.remove_node(time, node)

        self.participation_time += node.leave_time - node.join_time
        logs.debug(f"[NodeRegistry] leave node={node.id} t={time}")

    # --------------------------------------------------
    # lookups
    # --------------------------------------------------
    def get(self, node_id: int) -> MobileNode:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise KeyError(f"[NodeRegistry] unknown node id: {node_id}") from None

    def __contains__(self, node_id: int) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def active(self) -> Tuple[MobileNode, ...]:
        return tuple(self._active)

    @property
    def active_count(self) -> int:
        return len(self._active)

    @property
    def unique_nodes(self) -> int:
        """Distinct identities issued during the run (the trace's node count)."""
        return self._next_id
