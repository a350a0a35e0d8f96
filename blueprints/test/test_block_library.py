import pytest

from blueprints.core.BlockLibrary import (
    BLOCK_LIBRARY,
    BlockTemplate,
    PortSpec,
    get_block_template,
    list_block_templates,
)
from blueprints.core.Types import BlockKind, PortDirection


class TestBlockLibrary:

    def test_every_kind_has_a_template(self):
        assert set(BLOCK_LIBRARY.keys()) == set(BlockKind)

    def test_listing_order(self):
        kinds = [t.kind for t in list_block_templates()]
        assert kinds == [BlockKind.START, BlockKind.SELECT, BlockKind.LOOP, BlockKind.WRITE, BlockKind.IF]

    def test_port_order_and_direction(self):
        loop = get_block_template(BlockKind.LOOP)
        assert [p.label for p in loop.ports] == ["Table", "Row", "End"]
        assert loop.ports[0].direction == PortDirection.INPUT
        assert [p.label for p in loop.ports if p.is_output()] == ["Row", "End"]

    def test_lookup_by_string(self):
        assert get_block_template("write") is BLOCK_LIBRARY[BlockKind.WRITE]

    def test_lookup_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown block kind"):
            get_block_template("goto")

    def test_port_index(self):
        select = get_block_template(BlockKind.SELECT)
        assert select.port_index("Fields") == 1
        assert select.port_index("Missing") == -1
        assert select.get_port("Result") == PortSpec("Result", PortDirection.OUTPUT)
        assert select.get_port("Missing") is None

    def test_templates_are_immutable(self):
        template = get_block_template(BlockKind.START)
        with pytest.raises(Exception):
            template.title = "changed"

    def test_library_is_read_only(self):
        with pytest.raises(TypeError):
            BLOCK_LIBRARY[BlockKind.START] = None

    def test_duplicate_port_labels_rejected(self):
        with pytest.raises(ValueError, match="Duplicate port label"):
            BlockTemplate(
                BlockKind.WRITE, "BAD", "",
                (PortSpec("A", PortDirection.INPUT), PortSpec("A", PortDirection.OUTPUT)),
            )
