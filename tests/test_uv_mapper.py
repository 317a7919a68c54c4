"""
Tests for face UV remapping and atlas lookup
"""
import dataclasses
import json

import pytest
from java2bedrock.converters.uv_mapper import (
    UV_INSET, calculate_uv, clean_texture_path, resolve_texture
)
from java2bedrock.texturing.spritesheet import AtlasData, AtlasFrame, load_atlas


def make_atlas(frames, width, height):
    return AtlasData(frames={path: AtlasFrame(*rect) for path, rect in frames.items()}, width=width, height=height)


STONE_PATH = "/pack/assets/minecraft/textures/block/stone.png"


class TestPassthrough:
    """No atlas data: Java UVs copied as origin + size"""

    def test_integer_uvs_are_exact(self):
        result = calculate_uv([0, 0, 8, 8], "block/stone", None)
        assert result == {"uv": [0, 0], "uv_size": [8, 8]}
        assert all(isinstance(v, int) for v in result["uv"] + result["uv_size"])

    def test_mirrored_uvs_keep_negative_size(self):
        result = calculate_uv([16, 0, 0, 16], "block/stone", None)
        assert result == {"uv": [16, 0], "uv_size": [-16, 16]}

    def test_texture_missing_from_atlas(self):
        atlas = make_atlas({STONE_PATH: (0, 0, 16, 16)}, 64, 64)
        result = calculate_uv([0, 0, 8, 8], "block/dirt", atlas)
        assert result == {"uv": [0, 0], "uv_size": [8, 8]}


class TestAtlasUV:
    """Atlas mode: frame offset, 16-unit normalization and inset"""

    def test_frame_offset_and_inset(self):
        atlas = make_atlas({STONE_PATH: (16, 0, 16, 16)}, 32, 16)
        result = calculate_uv([0, 0, 16, 16], "block/stone", atlas)
        assert result == {"uv": [8.016, 0.016], "uv_size": [7.984, 15.984]}

    def test_mirrored_face_insets_backwards(self):
        atlas = make_atlas({STONE_PATH: (16, 0, 16, 16)}, 32, 16)
        result = calculate_uv([16, 0, 0, 16], "block/stone", atlas)
        assert result == {"uv": [15.984, 0.016], "uv_size": [-7.984, 15.984]}

    def test_small_span_gets_proportional_inset(self):
        """The inset factor is clamp(span, -1, 1), not a pure sign"""
        atlas = make_atlas({STONE_PATH: (0, 0, 16, 16)}, 16, 16)
        result = calculate_uv([0, 0, 0.5, 0.5], "block/stone", atlas)
        assert result == {"uv": [0.008, 0.008], "uv_size": [0.492, 0.492]}

    def test_zero_span_has_no_inset(self):
        atlas = make_atlas({STONE_PATH: (0, 0, 16, 16)}, 16, 16)
        result = calculate_uv([4, 4, 4, 8], "block/stone", atlas)
        assert result["uv"][0] == 4
        assert result["uv_size"][0] == 0

    def test_inset_never_flips_sign(self):
        atlas = make_atlas({STONE_PATH: (32, 16, 16, 16)}, 64, 64)
        for u0, u1 in [(0, 16), (16, 0), (2, 14), (14, 2), (0, 1), (1, 0), (7, 9)]:
            result = calculate_uv([u0, 0, u1, 16], "block/stone", atlas)
            size = result["uv_size"][0]
            span = (u1 - u0) * 16 * 0.0625 * 16 / 64
            assert (size > 0) == (span > 0)
            if abs(span) > 2 * UV_INSET:
                assert abs(size) > 0

    def test_non_square_texture_frame(self):
        """UV units are 1/16 of the frame, whatever its pixel size"""
        atlas = make_atlas({STONE_PATH: (0, 0, 32, 64)}, 64, 64)
        result = calculate_uv([0, 0, 16, 16], "block/stone", atlas)
        assert result == {"uv": [0.016, 0.016], "uv_size": [7.984, 15.984]}


class TestAtlasLookup:
    """Frame lookup order and path normalization"""

    def test_exact_path_wins_over_cropped(self):
        atlas = make_atlas({
            "/x/block/lava_cropped.png": (0, 0, 16, 16),
            "/x/block/lava.png": (16, 0, 16, 16),
        }, 32, 32)
        assert atlas.find_frame("block/lava") == AtlasFrame(16, 0, 16, 16)

    def test_cropped_wins_over_filename_only(self):
        atlas = make_atlas({
            "/b/other/fire.png": (0, 0, 16, 16),
            "/a/textures/block/fire_cropped.png": (16, 0, 16, 16),
        }, 32, 32)
        assert atlas.find_frame("block/fire") == AtlasFrame(16, 0, 16, 16)

    def test_filename_only_fallback(self):
        atlas = make_atlas({"/elsewhere/torch.png": (0, 16, 16, 16)}, 32, 32)
        assert atlas.find_frame("block/torch") == AtlasFrame(0, 16, 16, 16)

    def test_filename_only_matches_cropped_copy(self):
        atlas = make_atlas({"/elsewhere/fire_cropped.png": (0, 16, 16, 16)}, 32, 32)
        assert atlas.find_frame("block/fire") == AtlasFrame(0, 16, 16, 16)

    def test_backslash_paths(self):
        atlas = make_atlas({"C:\\pack\\textures\\block\\stone.png": (0, 0, 16, 16)}, 16, 16)
        assert atlas.find_frame("block\\stone") == AtlasFrame(0, 0, 16, 16)
        assert atlas.find_frame("block/stone") == AtlasFrame(0, 0, 16, 16)

    def test_partial_name_does_not_match(self):
        atlas = make_atlas({"/x/block/cobblestone.png": (0, 0, 16, 16)}, 16, 16)
        assert atlas.find_frame("block/stone") is None

    def test_missing_texture(self):
        atlas = make_atlas({STONE_PATH: (0, 0, 16, 16)}, 16, 16)
        assert atlas.find_frame("block/dirt") is None
        assert atlas.find_frame("") is None


class TestAtlasData:
    """Atlas snapshot parsing and immutability"""

    def test_from_spritesheet(self):
        atlas = AtlasData.from_spritesheet({
            "frames": {STONE_PATH: {"frame": {"x": 16, "y": 0, "w": 16, "h": 16}}},
            "meta": {"size": {"w": 32, "h": 16}},
        })
        assert (atlas.width, atlas.height) == (32, 16)
        assert atlas.frames[STONE_PATH] == AtlasFrame(16, 0, 16, 16)

    def test_malformed_spritesheet(self):
        with pytest.raises(ValueError):
            AtlasData.from_spritesheet({"frames": {}})

    def test_rejects_empty_size(self):
        with pytest.raises(ValueError):
            AtlasData(frames={}, width=0, height=16)

    def test_is_read_only(self):
        atlas = make_atlas({STONE_PATH: (0, 0, 16, 16)}, 16, 16)
        with pytest.raises(TypeError):
            atlas.frames["other.png"] = AtlasFrame(0, 0, 1, 1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            atlas.width = 32

    def test_load_atlas_roundtrip(self, tmp_path):
        atlas = make_atlas({STONE_PATH: (16, 0, 16, 16)}, 32, 16)
        path = tmp_path / "atlas.json"
        path.write_text(json.dumps(atlas.to_spritesheet()))

        loaded = load_atlas(str(path))
        assert loaded.frames[STONE_PATH] == AtlasFrame(16, 0, 16, 16)
        assert (loaded.width, loaded.height) == (32, 16)

    def test_load_atlas_missing_or_broken(self, tmp_path):
        assert load_atlas(str(tmp_path / "missing.json")) is None
        broken = tmp_path / "broken.json"
        broken.write_text("{not json")
        assert load_atlas(str(broken)) is None


class TestTextureReferences:
    """Texture variable dereferencing"""

    def test_strips_namespace(self):
        assert resolve_texture("#0", {"0": "minecraft:block/stone"}) == "block/stone"

    def test_plain_path(self):
        assert resolve_texture("#all", {"all": "block/oak_planks"}) == "block/oak_planks"

    def test_follows_chained_references(self):
        textures = {"side": "#all", "all": "acme:block\\lamp"}
        assert resolve_texture("#side", textures) == "block/lamp"

    def test_missing_key(self):
        assert resolve_texture("#1", {"0": "block/stone"}) is None

    def test_reference_cycle(self):
        assert resolve_texture("#a", {"a": "#b", "b": "#a"}) is None

    def test_empty_reference(self):
        assert resolve_texture(None, {}) is None
        assert resolve_texture("", {}) is None


    def test_reference_without_hash_is_unresolved(self):
        """Face textures are variables; a bare path is not looked up"""
        assert resolve_texture("block/stone", {"block/stone": "block/stone"}) is None
        assert resolve_texture("0", {"0": "block/stone"}) is None

    def test_clean_texture_path(self):
        assert clean_texture_path("minecraft:block\\stone") == "block/stone"
        assert clean_texture_path("block/dirt") == "block/dirt"
        assert clean_texture_path("acme:") is None
