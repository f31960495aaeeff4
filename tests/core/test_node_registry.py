#!filepath: tests/core/test_node_registry.py
import pytest

from mobsim.core.interfaces import Module
from mobsim.core.node import MobileNode
from mobsim.core.registry import NodeRegistry
from mobsim.utils.errors import InvalidStateError


class _Recorder(Module):
    def __init__(self, registry_ref):
        super().__init__(ctx=None)
        self.registry_ref = registry_ref
        self.seen = []

    def add_node(self, time, node):
        # statistics are updated after the broadcast
        self.seen.append(("add", time, node.id, self.registry_ref[0].node_joins))

    def remove_node(self, time, node):
        self.seen.append(("remove", time, node.id, self.registry_ref[0].participation_time))


def test_identities_are_dense_and_never_reused():
    reg = NodeRegistry()
    ids = []
    for t in range(5):
        node = MobileNode()
        ids.append(reg.add_node(float(t), node))
        reg.remove_node(float(t) + 0.5, node)

    assert ids == [0, 1, 2, 3, 4]
    assert reg.unique_nodes == 5
    assert reg.node_joins == 5
    assert reg.active_count == 0


def test_removed_nodes_stay_resolvable():
    reg = NodeRegistry()
    node = MobileNode(1.0, 2.0)
    node_id = reg.add_node(0.0, node)
    reg.remove_node(3.0, node)

    assert node_id in reg
    assert reg.get(node_id) is node
    assert node.leave_time == 3.0
    assert not node.active


def test_get_unknown_id():
    with pytest.raises(KeyError):
        NodeRegistry().get(42)


def test_participation_time_accumulates():
    reg = NodeRegistry()
    a, b = MobileNode(), MobileNode()
    reg.add_node(0.0, a)
    reg.add_node(2.0, b)
    reg.remove_node(5.0, a)
    reg.remove_node(4.0, b)

    assert reg.participation_time == pytest.approx(7.0)


def test_modules_notified_before_statistics():
    ref = []
    recorder = _Recorder(ref)
    reg = NodeRegistry([recorder])
    ref.append(reg)

    node = MobileNode()
    reg.add_node(1.0, node)
    reg.remove_node(4.0, node)

    assert recorder.seen == [("add", 1.0, 0, 0), ("remove", 4.0, 0, 0.0)]
    assert reg.node_joins == 1
    assert reg.participation_time == 3.0


def test_modules_added_later_are_notified():
    modules = []
    reg = NodeRegistry(modules)
    ref = [reg]
    recorder = _Recorder(ref)
    modules.append(recorder)

    reg.add_node(0.0, MobileNode())

    assert len(recorder.seen) == 1


def test_remove_before_add_is_rejected():
    with pytest.raises(InvalidStateError):
        NodeRegistry().remove_node(0.0, MobileNode())


def test_double_remove_is_rejected():
    reg = NodeRegistry()
    node = MobileNode()
    reg.add_node(0.0, node)
    reg.remove_node(1.0, node)

    with pytest.raises(InvalidStateError):
        reg.remove_node(2.0, node)


def test_double_add_is_rejected():
    reg = NodeRegistry()
    node = MobileNode()
    reg.add_node(0.0, node)

    with pytest.raises(InvalidStateError):
        reg.add_node(1.0, node)


def test_leave_before_join_is_rejected():
    reg = NodeRegistry()
    node = MobileNode()
    reg.add_node(5.0, node)

    with pytest.raises(InvalidStateError):
        reg.remove_node(4.0, node)


def test_node_from_another_registry_is_rejected():
    other = NodeRegistry()
    node = MobileNode()
    other.add_node(0.0, node)

    with pytest.raises(InvalidStateError):
        NodeRegistry().remove_node(1.0, node)
