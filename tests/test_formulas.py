"""
Tests for transform diagnostics
"""
import pytest
from java2bedrock.converters.formulas import FORMULAS, analyze_model, convert_with_formula
from java2bedrock.converters.geometry import transform_element
from java2bedrock.exceptions import InvalidInputError
from java2bedrock.schema.java import JavaElement


MODEL = {
    "elements": [
        {"from": [2, 3, 4], "to": [5, 9, 14], "rotation": {"origin": [8, 8, 8], "angle": 45, "axis": "y"}},
        {"from": [0, 0, 0], "to": [1, 1, 1], "rotation": {"origin": [8, 8, 8], "angle": 22.5, "axis": "x"}},
    ]
}


def first_cube(document):
    bones = document["minecraft:geometry"][0]["bones"]
    return bones[-1]["cubes"][0]


class TestConvertWithFormula:
    """Each variant renders the same model differently"""

    def test_all_variants_render(self):
        for key in FORMULAS:
            document = convert_with_formula(MODEL, key)
            geometry = document["minecraft:geometry"][0]
            assert geometry["description"]["identifier"] == f"geometry.test_{key}"
            assert [b["name"] for b in geometry["bones"]] == ["root", "root_x", "root_y", "root_z"]
            assert len(geometry["bones"][-1]["cubes"]) == 2

    def test_current_matches_converter(self):
        cube = first_cube(convert_with_formula(MODEL, "current"))
        expected = transform_element(JavaElement.model_validate(MODEL["elements"][0]))
        assert cube == expected

    def test_alternate_origins(self):
        assert first_cube(convert_with_formula(MODEL, "alt1"))["origin"] == [3, 3, 4]
        assert first_cube(convert_with_formula(MODEL, "alt2"))["origin"] == [6, 3, -4]
        assert first_cube(convert_with_formula(MODEL, "alt3"))["origin"] == [4.5, 3, 1]
        assert first_cube(convert_with_formula(MODEL, "alt5"))["origin"] == [-4, 3, 3]

    def test_alternate_rotations(self):
        assert first_cube(convert_with_formula(MODEL, "alt4"))["rotation"] == [0, 45, 0]
        assert first_cube(convert_with_formula(MODEL, "current"))["rotation"] == [0, -45, 0]

    def test_unknown_formula(self):
        with pytest.raises(KeyError):
            convert_with_formula(MODEL, "alt99")

    def test_no_elements(self):
        with pytest.raises(InvalidInputError):
            convert_with_formula({"elements": []}, "current")


class TestAnalyzeModel:
    """Element statistics"""

    def test_analysis(self):
        analysis = analyze_model(MODEL)
        assert analysis.total_elements == 2
        assert analysis.has_rotations
        assert analysis.rotation_axes == {"x", "y"}
        assert analysis.bounds_min == [0, 0, 0]
        assert analysis.bounds_max == [5, 9, 14]
        assert analysis.center == [2.5, 4.5, 7]

    def test_unrotated_model(self):
        analysis = analyze_model({"elements": [{"from": [0, 0, 0], "to": [16, 16, 16]}]})
        assert not analysis.has_rotations
        assert analysis.rotation_axes == set()

    def test_no_elements(self):
        with pytest.raises(InvalidInputError):
            analyze_model({"parent": "block/cube_all"})
