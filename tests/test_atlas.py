"""
Tests for atlas packing and building
"""
import json
import os

import pytest
from PIL import Image

from java2bedrock.texturing.atlas import build_atlas, collect_texture_files, cropped_path
from java2bedrock.texturing.packer import Placement, next_power_of_2, pack_rectangles
from java2bedrock.texturing.spritesheet import AtlasFrame, load_atlas


def write_png(path, size, color=(255, 0, 0, 255)):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    Image.new('RGBA', size, color).save(path)
    return path


class TestPacker:
    """Shelf packing into power-of-2 squares"""

    def test_next_power_of_2(self):
        assert next_power_of_2(1) == 1
        assert next_power_of_2(16) == 16
        assert next_power_of_2(17) == 32
        assert next_power_of_2(0) == 1

    def test_empty(self):
        placements, size = pack_rectangles([])
        assert placements == []
        assert size == 16

    def test_single_rect(self):
        placements, size = pack_rectangles([(16, 16, "a")])
        assert size == 16
        assert placements == [Placement("a", 0, 0, 16, 16)]

    def test_same_size_keeps_input_order(self):
        placements, size = pack_rectangles([(16, 16, "a"), (16, 16, "b")])
        assert size == 32
        assert [(p.id, p.x, p.y) for p in placements] == [("a", 0, 0), ("b", 16, 0)]

    def test_rects_do_not_overlap(self):
        rects = [(16, 16, i) for i in range(5)] + [(32, 8, "wide"), (8, 32, "tall")]
        placements, size = pack_rectangles(rects)
        assert len(placements) == len(rects)

        for i, a in enumerate(placements):
            assert a.x + a.width <= size
            assert a.y + a.height <= size
            for b in placements[i + 1:]:
                overlap_x = a.x < b.x + b.width and b.x < a.x + a.width
                overlap_y = a.y < b.y + b.height and b.y < a.y + a.height
                assert not (overlap_x and overlap_y)

    def test_padding_separates_rects(self):
        placements, size = pack_rectangles([(16, 16, "a"), (16, 16, "b")], padding=2)
        assert size == 64
        assert [(p.x, p.y) for p in placements] == [(0, 0), (18, 0)]

    def test_too_large(self):
        with pytest.raises(RuntimeError):
            pack_rectangles([(64, 64, "big")], max_size=32)


class TestBuildAtlas:
    """Atlas image + spritesheet JSON"""

    def test_two_textures(self, tmp_path):
        a = write_png(str(tmp_path / "textures" / "block" / "a.png"), (16, 16))
        b = write_png(str(tmp_path / "textures" / "block" / "b.png"), (16, 16), (0, 255, 0, 255))
        stem = str(tmp_path / "out" / "acme")

        atlas = build_atlas([a, b], stem)

        assert (atlas.width, atlas.height) == (32, 32)
        assert atlas.frames[os.path.abspath(a)] == AtlasFrame(0, 0, 16, 16)
        assert atlas.frames[os.path.abspath(b)] == AtlasFrame(16, 0, 16, 16)
        assert atlas.find_frame("block/b") == AtlasFrame(16, 0, 16, 16)

        with Image.open(stem + ".png") as img:
            assert img.size == (32, 32)
            assert img.getpixel((20, 4)) == (0, 255, 0, 255)
            # Unused space is transparent
            assert img.getpixel((4, 20))[3] == 0

        with open(stem + ".json") as f:
            data = json.load(f)
        assert data["meta"]["size"] == {"w": 32, "h": 32}
        assert data["meta"]["image"] == "acme.png"
        assert load_atlas(stem + ".json") == atlas

    def test_duplicate_paths(self, tmp_path):
        a = write_png(str(tmp_path / "a.png"), (16, 16))
        atlas = build_atlas([a, a], str(tmp_path / "atlas"))
        assert len(atlas.frames) == 1

    def test_animated_texture_is_cropped(self, tmp_path):
        fire = write_png(str(tmp_path / "textures" / "block" / "fire.png"), (16, 64))
        with open(fire + ".mcmeta", "w") as f:
            json.dump({"animation": {}}, f)

        atlas = build_atlas([fire], str(tmp_path / "atlas"))

        assert list(atlas.frames) == [cropped_path(os.path.abspath(fire))]
        assert list(atlas.frames)[0].endswith("fire_cropped.png")
        assert atlas.find_frame("block/fire") == AtlasFrame(0, 0, 16, 16)
        assert (atlas.width, atlas.height) == (16, 16)

    def test_unreadable_texture_is_skipped(self, tmp_path):
        good = write_png(str(tmp_path / "good.png"), (16, 16))
        bad = tmp_path / "bad.png"
        bad.write_bytes(b"not a png")

        atlas = build_atlas([str(bad), good, str(tmp_path / "missing.png")], str(tmp_path / "atlas"))
        assert list(atlas.frames) == [os.path.abspath(good)]

    def test_nothing_to_pack(self, tmp_path):
        assert build_atlas([], str(tmp_path / "atlas")) is None
        assert not (tmp_path / "atlas.png").exists()


class TestCollectTextureFiles:
    """Texture path -> file lookup"""

    def test_existing_files_only(self, tmp_path):
        textures_dir = str(tmp_path / "textures")
        stone = write_png(os.path.join(textures_dir, "block", "stone.png"), (16, 16))

        files = collect_texture_files(["block/stone", "block/missing", "block/stone"], textures_dir)
        assert files == [stone]
