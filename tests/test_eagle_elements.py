"""Tests for EAGLE element builders, the layer table and the holes library."""

from __future__ import annotations

import pytest

from protoboard.eagle import elements, layers
from protoboard.eagle.library import (
    MOUNTING_HOLE_DESCRIPTION,
    MOUNTING_HOLE_PACKAGE,
    mounting_hole_library,
    mounting_hole_package,
)
from protoboard.geom.primitives import (
    Arc,
    Circle,
    ElementInstance,
    Label,
    Polygon,
    PositionNM,
    Rectangle,
    Signal,
    Via,
    Wire,
)


class TestElementBuilders:
    def test_wire_attribute_order(self) -> None:
        node = elements.wire(16, 406_400, 17_780_000, 11_430_000, 17_780_000, 13_970_000)
        assert str(node) == (
            '<wire x1 = "17.78" y1 = "11.43" x2 = "17.78" y2 = "13.97" width = "0.4064" layer = "16" />\n'
        )

    def test_arc_adds_curve_then_cap(self) -> None:
        node = elements.arc(51, 2_489_200, -2_159_000, 0, 0, -2_159_000, 90, cap="flat")
        assert list(node.attributes) == ["x1", "y1", "x2", "y2", "width", "layer", "curve", "cap"]
        assert 'curve = "90" cap = "flat"' in str(node)

    def test_arc_without_cap(self) -> None:
        node = elements.arc(20, 127_000, 27_000_000, 12_500_000, 23_000_000, 16_500_000, 90)
        assert "cap" not in node.attributes

    def test_via(self) -> None:
        node = elements.via(-25_400_000, 6_350_000, "1-16", 1_200_000, 1_930_400)
        assert str(node) == '<via x = "-25.4" y = "6.35" extent = "1-16" drill = "1.2" diameter = "1.9304" />\n'

    def test_circle(self) -> None:
        node = elements.circle(21, 152_400, 0, 0, 3_429_000)
        assert list(node.attributes) == ["x", "y", "radius", "width", "layer"]
        assert node.get("layer") == 21

    def test_text_carries_content(self) -> None:
        node = elements.text(21, 2_000_000, -18_000_000, -15_500_000, "Brunswick Hackerspace")
        assert str(node) == '<text x = "-18" y = "-15.5" size = "2" layer = "21">Brunswick Hackerspace</text>\n'

    def test_element(self) -> None:
        node = elements.element("H1", "holes", "3,0", "MOUNT-HOLE3.0", 23_000_000, 12_500_000)
        assert str(node) == (
            '<element name = "H1" library = "holes" package = "3,0" value = "MOUNT-HOLE3.0" x = "23" y = "12.5" />\n'
        )

    def test_polygon_holds_vertices(self) -> None:
        points = [PositionNM(0, 0), PositionNM(1_000_000, 0), PositionNM(0, 1_000_000)]
        node = elements.polygon(21, 406_400, points)
        assert [child.name for child in node.children] == ["vertex"] * 3
        assert node.children[1].get("x") == 1

    def test_rectangle(self) -> None:
        node = elements.rectangle(30, -27_000_000, -16_500_000, 27_000_000, 16_500_000)
        assert str(node) == '<rectangle x1 = "-27" y1 = "-16.5" x2 = "27" y2 = "16.5" layer = "30" />\n'

    def test_layer_uses_yes_no(self) -> None:
        node = elements.layer(layers.get_layer(30))
        assert str(node) == (
            '<layer number = "30" name = "bStop" color = "7" fill = "6" visible = "no" active = "yes" />\n'
        )

    def test_hole(self) -> None:
        assert str(elements.hole(0, 0, 3_000_000)) == '<hole x = "0" y = "0" drill = "3" />\n'

    def test_signal_keeps_item_order(self) -> None:
        a = PositionNM(0, 0)
        b = PositionNM(0, -2_540_000)
        group = Signal(
            "N$1",
            (
                Via(a, 1_200_000, 1_930_400, "1-16"),
                Via(b, 1_200_000, 1_930_400, "1-16"),
                Wire(b, a, 406_400, 16),
            ),
        )
        node = elements.signal(group)
        assert node.get("name") == "N$1"
        assert [child.name for child in node.children] == ["via", "via", "wire"]


class TestPrimitiveConversion:
    @pytest.mark.parametrize(
        ("item", "tag"),
        [
            (Wire(PositionNM(0, 0), PositionNM(1, 1), 1, 20), "wire"),
            (Arc(PositionNM(0, 0), PositionNM(1, 1), 1, 20, 90), "wire"),
            (Circle(PositionNM(0, 0), 1, 1, 21), "circle"),
            (Label(PositionNM(0, 0), 1, 21, "x"), "text"),
            (Via(PositionNM(0, 0), 1, 2, "1-16"), "via"),
            (Rectangle(PositionNM(0, 0), PositionNM(1, 1), 30), "rectangle"),
            (Polygon((PositionNM(0, 0), PositionNM(1, 0), PositionNM(0, 1)), 1, 21), "polygon"),
            (ElementInstance("H1", "holes", "3,0", "MOUNT-HOLE3.0", PositionNM(0, 0)), "element"),
        ],
    )
    def test_primitive_node_tag(self, item: object, tag: str) -> None:
        assert elements.primitive_node(item).name == tag  # type: ignore[arg-type]

    def test_arc_conversion_keeps_curve(self) -> None:
        node = elements.primitive_node(Arc(PositionNM(0, 0), PositionNM(1, 1), 1, 20, -90, "round"))
        assert node.get("curve") == -90
        assert node.get("cap") == "round"

    def test_unknown_primitive_raises(self) -> None:
        with pytest.raises(TypeError):
            elements.primitive_node(PositionNM(0, 0))  # type: ignore[arg-type]


class TestLayerTable:
    def test_numbers_unique_and_ascending(self) -> None:
        numbers = [layer.number for layer in layers.LAYER_TABLE]
        assert numbers == sorted(set(numbers))

    @pytest.mark.parametrize(
        ("number", "name"),
        [
            (layers.TOP, "Top"),
            (layers.BOTTOM, "Bottom"),
            (layers.DIMENSION, "Dimension"),
            (layers.T_PLACE, "tPlace"),
            (layers.B_STOP, "bStop"),
            (layers.T_KEEPOUT, "tKeepout"),
            (layers.V_RESTRICT, "vRestrict"),
            (layers.DOCUMENT, "Document"),
            (layers.T_DOCU, "tDocu"),
        ],
    )
    def test_named_layers(self, number: int, name: str) -> None:
        assert layers.layer_name(number) == name

    def test_through_extent(self) -> None:
        assert layers.THROUGH_EXTENT == "1-16"

    def test_unknown_layer_raises(self) -> None:
        with pytest.raises(KeyError):
            layers.get_layer(99)


class TestMountingHoleLibrary:
    def test_package_contents_in_order(self) -> None:
        package = mounting_hole_package()
        assert package.get("name") == MOUNTING_HOLE_PACKAGE
        tags = [child.name for child in package.children]
        assert tags == ["description", "wire", "wire"] + ["circle"] * 8 + ["text", "hole"]

    def test_description_is_escaped_on_output(self) -> None:
        package = mounting_hole_package()
        assert package.children[0].text == MOUNTING_HOLE_DESCRIPTION
        assert "&lt;b&gt;MOUNTING HOLE&lt;/b&gt; 3.0 mm with drill center" in str(package)

    def test_keepout_rings_cover_layers_39_to_43(self) -> None:
        package = mounting_hole_package()
        rings = [c for c in package.children if c.name == "circle" and c.get("radius") is not None]
        assert [c.get("layer") for c in rings[3:]] == [39, 40, 41, 42, 43]

    def test_docu_arcs_are_flat_capped(self) -> None:
        arcs = [c for c in mounting_hole_package().children if c.name == "wire"]
        assert [a.get("curve") for a in arcs] == [90, -90]
        assert all(a.get("cap") == "flat" for a in arcs)

    def test_hole_drill(self) -> None:
        hole = mounting_hole_package().children[-1]
        assert str(hole) == '<hole x = "0" y = "0" drill = "3" />\n'

    def test_library_structure(self) -> None:
        library = mounting_hole_library()
        assert library.get("name") == "holes"
        (packages,) = library.children
        assert packages.name == "packages"
        assert packages.children[0].get("name") == "3,0"
