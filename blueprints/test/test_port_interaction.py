import pytest

from blueprints.core.GraphPrimitives import BlockGraph, Connection, PortRef
from blueprints.core.PortInteraction import InteractionState, PortInteraction


class TestPortInteraction:

    def setup_method(self):
        self.graph = BlockGraph()
        self.graph.clear_connections()
        self.machine = PortInteraction(self.graph)

    def click(self, node_id, label):
        port = self.graph.get_node_by_id(node_id).template.get_port(label)
        return self.machine.port_clicked(node_id, port)

    def test_starts_idle(self):
        assert self.machine.state == InteractionState.IDLE
        assert self.machine.pending is None

    def test_input_click_while_idle_is_ignored(self):
        result = self.click("write", "Value")
        assert result.state == InteractionState.IDLE
        assert result.connection is None
        assert self.graph.connections == ()

    def test_output_click_arms(self):
        result = self.click("entry", "Output")
        assert result.state == InteractionState.ARMED
        assert self.machine.pending == PortRef("entry", "Output")

    def test_connect_output_to_input(self):
        self.click("entry", "Output")
        result = self.click("select", "Rows")

        expected = Connection.between("entry", "Output", "select", "Rows")
        assert result.state == InteractionState.IDLE
        assert result.connection == expected
        assert result.added is True
        assert self.graph.connections == (expected,)
        assert self.machine.state == InteractionState.IDLE

    def test_self_loop_cancels(self):
        """Arming an output then clicking an input on the same block returns to idle."""
        self.click("loop", "Row")
        result = self.click("loop", "Table")
        assert result.state == InteractionState.IDLE
        assert result.connection is None
        assert self.graph.connections == ()

    def test_rearm_overrides_previous_output(self):
        """The last clicked output is the connection source."""
        self.click("entry", "Output")
        self.click("select", "Result")
        self.click("write", "Value")
        assert self.graph.connections == (Connection.between("select", "Result", "write", "Value"),)

    def test_rearm_same_output(self):
        self.click("entry", "Event")
        self.click("entry", "Event")
        assert self.machine.pending == PortRef("entry", "Event")

    def test_duplicate_returns_to_idle(self):
        self.click("entry", "Output")
        self.click("select", "Rows")
        self.click("entry", "Output")
        result = self.click("select", "Rows")

        assert result.added is False
        assert result.state == InteractionState.IDLE
        assert len(self.graph.connections) == 1

    def test_cancel(self):
        self.click("entry", "Output")
        self.machine.cancel()
        assert self.machine.is_armed() is False

    @pytest.mark.parametrize("source,target", [
        (("entry", "Output"), ("loop", "Table")),
        (("loop", "End"), ("select", "Fields")),
        (("select", "Result"), ("write", "Value")),
    ])
    def test_connections_always_output_to_input(self, source, target):
        self.click(*source)
        result = self.click(*target)
        src_node = self.graph.get_node_by_id(result.connection.source.node_id)
        dst_node = self.graph.get_node_by_id(result.connection.target.node_id)
        assert src_node.template.get_port(result.connection.source.port).is_output()
        assert dst_node.template.get_port(result.connection.target.port).is_input()
