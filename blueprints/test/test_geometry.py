from blueprints.core.Geometry import (
    NODE_WIDTH,
    PORT_VERTICAL_OFFSET,
    PORT_VERTICAL_SPACING,
    LinkSegment,
    Point,
    anchor,
    link_segments,
)
from blueprints.core.GraphPrimitives import BlockGraph, Connection
from blueprints.core.Types import PortDirection


class TestGeometry:

    def setup_method(self):
        self.graph = BlockGraph()

    def test_output_anchor(self):
        entry = self.graph.get_node_by_id("entry")
        point = anchor(entry, "Output", PortDirection.OUTPUT)
        assert point == Point(18 + NODE_WIDTH, 18 + PORT_VERTICAL_OFFSET + PORT_VERTICAL_SPACING)

    def test_input_anchor(self):
        select = self.graph.get_node_by_id("select")
        assert anchor(select, "Rows", PortDirection.INPUT) == Point(280, 140 + PORT_VERTICAL_OFFSET)

    def test_anchor_follows_moves(self):
        select = self.graph.get_node_by_id("select")
        before = anchor(select, "Fields", PortDirection.INPUT)
        self.graph.move_node("select", 15, 25)
        after = anchor(select, "Fields", PortDirection.INPUT)
        assert (after.x - before.x, after.y - before.y) == (15, 25)

    def test_unknown_label_uses_minus_one(self):
        write = self.graph.get_node_by_id("write")
        assert anchor(write, "Nope", PortDirection.INPUT).y == 120 + PORT_VERTICAL_OFFSET - PORT_VERTICAL_SPACING

    def test_link_segments(self):
        segments = link_segments(*self.graph.snapshot())
        assert len(segments) == 3
        assert segments[0] == LinkSegment(Point(258, 124), Point(280, 214))

    def test_link_segments_skip_missing_nodes(self):
        self.graph.add_connection(Connection.between("ghost", "Row", "write", "Value"))
        assert len(link_segments(self.graph.nodes, self.graph.connections)) == 3
