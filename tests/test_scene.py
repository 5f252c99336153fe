"""Fast tests for plate scene composition.

Validates that:
- The palette and authored layout are what the scene expects
- Support lines come from the right footprint corners, in order
- Plates mirror their configs exactly
- Scatter boxes stay inside their sampling ranges and are seed-reproducible
- render() emits lines, then plates, then boxes, with balanced push/pop
"""

import numpy as np
import pytest

from plate_scene import RecordingCanvas, create_scene
from plate_scene.anchors import corner_anchors, derive_vertical_lines
from plate_scene.composer import describe_scene, scene_id
from plate_scene.layout import PLATE_CONFIGS, PlateConfig, build_plates
from plate_scene.palette import (
    BOX_COLOR_NAMES,
    COLOR_NAMES,
    DEFAULT_PALETTE,
    hex_to_rgba,
)
from plate_scene.primitives import LINE_HEIGHT, LINE_THICKNESS, Plate, VerticalLine
from plate_scene.scatter import ScatterConfig, generate_random_boxes, sample_box

BLUE_CONFIG = PLATE_CONFIGS[2]


class _ScriptedRng:
    """Stand-in for np.random.Generator that replays fixed draws."""

    def __init__(self, integers, uniforms):
        self._integers = list(integers)
        self._uniforms = list(uniforms)

    def integers(self, high):
        value = self._integers.pop(0)
        assert 0 <= value < high
        return value

    def uniform(self, low, high):
        value = self._uniforms.pop(0)
        assert low <= value <= high
        return value


# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------


class TestPalette:
    def test_hex_to_rgba(self):
        assert hex_to_rgba("#FF0000") == (1.0, 0.0, 0.0, 1.0)
        assert hex_to_rgba("000000", alpha=0.5) == (0.0, 0.0, 0.0, 0.5)

    def test_hex_to_rgba_rejects_short(self):
        with pytest.raises(ValueError):
            hex_to_rgba("#FFF")

    def test_six_named_colors(self):
        assert len(COLOR_NAMES) == 6
        for name in COLOR_NAMES:
            rgba = DEFAULT_PALETTE[name]
            assert len(rgba) == 4
            assert all(0 <= c <= 1 for c in rgba)

    def test_unknown_name(self):
        with pytest.raises(KeyError):
            DEFAULT_PALETTE["purple"]

    def test_box_colors_exclude_background_and_line(self):
        colors = DEFAULT_PALETTE.box_colors
        assert len(colors) == 4
        assert DEFAULT_PALETTE.background not in colors
        assert DEFAULT_PALETTE.line not in colors
        assert [DEFAULT_PALETTE.name_of(c) for c in colors] == list(BOX_COLOR_NAMES)


# ---------------------------------------------------------------------------
# Layout & plates
# ---------------------------------------------------------------------------


class TestLayout:
    def test_eight_configs(self):
        assert len(PLATE_CONFIGS) == 8

    def test_unknown_color_rejected(self):
        with pytest.raises(KeyError):
            PlateConfig(0, 0, 0, 10, 10, 10, "purple")

    def test_plates_match_configs(self):
        plates = build_plates(PLATE_CONFIGS, DEFAULT_PALETTE)
        assert len(plates) == len(PLATE_CONFIGS)
        for plate, cfg in zip(plates, PLATE_CONFIGS):
            assert (plate.x, plate.y, plate.z) == (cfg.x, cfg.y, cfg.z)
            assert plate.width == cfg.width
            assert plate.height == cfg.thickness
            assert plate.depth == cfg.depth
            assert plate.color == DEFAULT_PALETTE[cfg.color]

    def test_blue_plate_fields(self):
        plate = BLUE_CONFIG.to_plate(DEFAULT_PALETTE)
        assert plate == Plate(100, 0, -15, 120, 10, 100, DEFAULT_PALETTE.blue)

    @pytest.mark.parametrize("field", ["width", "height", "depth"])
    def test_non_positive_extent_rejected(self, field):
        kwargs = dict(x=0, y=0, z=0, width=1, height=1, depth=1, color=DEFAULT_PALETTE.red)
        kwargs[field] = 0
        with pytest.raises(ValueError):
            Plate(**kwargs)


# ---------------------------------------------------------------------------
# Support-line anchors
# ---------------------------------------------------------------------------


class TestAnchors:
    def test_blue_plate_corners(self):
        bottom_left, top_right = corner_anchors(BLUE_CONFIG)
        assert bottom_left == (40, -50, -15)
        assert top_right == (160, 50, -15)

    def test_sixteen_lines_in_config_order(self):
        lines = derive_vertical_lines(PLATE_CONFIGS, DEFAULT_PALETTE)
        assert len(lines) == 16
        for i, cfg in enumerate(PLATE_CONFIGS):
            bl, tr = lines[2 * i], lines[2 * i + 1]
            assert bl.anchor == (cfg.x - cfg.width / 2, cfg.y - cfg.depth / 2, cfg.z)
            assert tr.anchor == (cfg.x + cfg.width / 2, cfg.y + cfg.depth / 2, cfg.z)

    def test_line_constants(self):
        for line in derive_vertical_lines(PLATE_CONFIGS, DEFAULT_PALETTE):
            assert line.height == LINE_HEIGHT == 300
            assert line.width == LINE_THICKNESS == 5
            assert line.color == DEFAULT_PALETTE.line

    def test_deterministic(self):
        a = derive_vertical_lines(PLATE_CONFIGS, DEFAULT_PALETTE)
        b = derive_vertical_lines(PLATE_CONFIGS, DEFAULT_PALETTE)
        assert a == b


# ---------------------------------------------------------------------------
# Scatter boxes
# ---------------------------------------------------------------------------


class TestScatter:
    @pytest.fixture(scope="class")
    def lines(self):
        return derive_vertical_lines(PLATE_CONFIGS, DEFAULT_PALETTE)

    def test_scripted_draws_give_exact_box(self, lines):
        # color=blue, size=20, line 4 (blue plate bottom-left), jitter (+3, -2), z=-100
        rng = _ScriptedRng(integers=[1, 4], uniforms=[20.0, 3.0, -2.0, -100.0])
        box = sample_box(lines, DEFAULT_PALETTE.box_colors, rng)
        assert box == Plate(43.0, -52.0, -100.0, 20.0, 20.0, 20.0, DEFAULT_PALETTE.blue)

    @pytest.mark.parametrize("seed", range(25))
    def test_ranges(self, lines, seed):
        rng = np.random.default_rng(seed)
        boxes = generate_random_boxes(lines, DEFAULT_PALETTE.box_colors, rng)
        assert len(boxes) == 20
        for box in boxes:
            assert box.width == box.depth == box.height
            assert 10 <= box.width <= 30
            assert box.color in DEFAULT_PALETTE.box_colors
            assert -300 <= box.z <= -40
            assert any(
                abs(box.x - line.x) <= 10 and abs(box.y - line.y) <= 10
                for line in lines
            ), f"box at ({box.x:.1f}, {box.y:.1f}) not near any line"

    def test_count_from_config(self, lines):
        rng = np.random.default_rng(0)
        boxes = generate_random_boxes(
            lines, DEFAULT_PALETTE.box_colors, rng, ScatterConfig(count=3)
        )
        assert len(boxes) == 3

    def test_requires_lines(self):
        with pytest.raises(ValueError):
            generate_random_boxes((), DEFAULT_PALETTE.box_colors, np.random.default_rng(0))

    def test_requires_colors(self, lines):
        with pytest.raises(ValueError):
            generate_random_boxes(lines, (), np.random.default_rng(0))


# ---------------------------------------------------------------------------
# Composer
# ---------------------------------------------------------------------------


class TestComposer:
    def test_counts(self):
        scene = create_scene(seed=42)
        assert len(scene.vertical_lines) == 16
        assert len(scene.plates) == 8
        assert len(scene.random_boxes) == 20
        assert scene.draw_count == 44

    def test_seed_deterministic(self):
        s1 = create_scene(seed=123)
        s2 = create_scene(seed=123)
        assert s1.random_boxes == s2.random_boxes
        assert s1 == s2

    def test_seed_overrides_rng(self):
        s1 = create_scene(seed=5, rng=np.random.default_rng(99))
        s2 = create_scene(seed=5)
        assert s1.random_boxes == s2.random_boxes

    def test_injected_rng(self):
        s1 = create_scene(rng=np.random.default_rng(7))
        s2 = create_scene(rng=np.random.default_rng(7))
        assert s1.random_boxes == s2.random_boxes
        assert s1.seed is None

    def test_different_seeds_differ(self):
        assert create_scene(seed=1).random_boxes != create_scene(seed=2).random_boxes

    def test_lines_and_plates_independent_of_seed(self):
        s1 = create_scene(seed=1)
        s2 = create_scene(seed=2)
        assert s1.vertical_lines == s2.vertical_lines
        assert s1.plates == s2.plates

    def test_scene_is_frozen(self):
        scene = create_scene(seed=0)
        with pytest.raises(AttributeError):
            scene.plates = ()


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TestRender:
    @pytest.fixture(scope="class")
    def scene(self):
        return create_scene(seed=42)

    @pytest.fixture
    def canvas(self, scene):
        canvas = RecordingCanvas()
        scene.render(canvas)
        return canvas

    def test_44_boxes(self, canvas):
        assert len(canvas.boxes) == 44

    def test_background_first(self, canvas, scene):
        assert canvas.calls[0].name == "background"
        assert canvas.background_color == scene.palette.background

    def test_draw_order(self, canvas, scene):
        entities = [*scene.vertical_lines, *scene.plates, *scene.random_boxes]
        for entity, drawn in zip(entities, canvas.boxes):
            assert drawn.color == entity.color
            if isinstance(entity, VerticalLine):
                assert drawn.pos == (entity.x, entity.y, entity.z - entity.height / 2)
                assert drawn.size == (entity.width, entity.width, entity.height)
            else:
                assert drawn.pos == entity.pos
                assert drawn.size == (entity.width, entity.depth, entity.height)

    def test_per_entity_call_pattern(self, canvas):
        pattern = ["push", "translate", "fill", "no_stroke", "box", "pop"]
        names = canvas.call_names()[1:]
        assert len(names) == 44 * len(pattern)
        for i in range(44):
            assert names[i * 6 : (i + 1) * 6] == pattern

    def test_stack_balanced(self, canvas):
        assert canvas.stack_depth == 0

    def test_no_stroke(self, canvas):
        assert not any(b.stroke for b in canvas.boxes)

    def test_rerender_identical(self, scene):
        a, b = RecordingCanvas(), RecordingCanvas()
        scene.render(a)
        scene.render(b)
        assert a.calls == b.calls

    def test_blue_plate_line_draw(self):
        line = derive_vertical_lines([BLUE_CONFIG], DEFAULT_PALETTE)[0]
        canvas = RecordingCanvas()
        line.draw(canvas)
        assert canvas.boxes[0].pos == (40, -50, -165)
        assert canvas.boxes[0].size == (5, 5, 300)


# ---------------------------------------------------------------------------
# Description
# ---------------------------------------------------------------------------


class TestDescribe:
    def test_scene_id(self):
        assert scene_id(42) == "00002a"
        assert len(scene_id(2**32 - 1)) == 6

    def test_describe_scene(self):
        desc = describe_scene(create_scene(seed=42))
        assert desc.startswith("Scene #00002a (seed=42)")
        assert "16 lines, 8 plates, 20 boxes" in desc
        # header + 3 section titles + 44 entries
        assert len(desc.splitlines()) == 48
        assert "blue   at ( +100.0,    +0.0,   -15.0)  120 x 100 x 10" in desc

    def test_describe_unseeded(self):
        desc = describe_scene(create_scene(rng=np.random.default_rng(0)))
        assert desc.startswith("Scene  16 lines")
