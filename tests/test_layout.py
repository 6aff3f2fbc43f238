from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from combthumb.dimensions import find_img_with_most_pixels
from combthumb.errors import EmptyImageArray, TooManyImages
from combthumb.layout import LayoutPlan, combine_images, plan_placements
from combthumb.scaling import FillPolicy, scale_all_images_to_same_size

RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)
WHITE = (255, 255, 255, 255)


def _solid(w: int, h: int, color=RED) -> Image.Image:
    return Image.new("RGBA", (w, h), color)


def _px(img: Image.Image, x: int, y: int) -> np.ndarray:
    return np.asarray(img)[y, x].astype(int)


def _placements(images, total_w, policy=FillPolicy.LETTERBOX):
    ref = find_img_with_most_pixels(images)
    scaled = scale_all_images_to_same_size(
        images, ref.width, ref.height, policy, n_jobs=1
    )
    plan = LayoutPlan.for_count(len(images))
    return plan_placements(plan, scaled, total_w, ref.height)


def test_plan_for_count():
    assert LayoutPlan.for_count(1) is LayoutPlan.SINGLE
    assert LayoutPlan.for_count(2) is LayoutPlan.PAIR
    assert LayoutPlan.for_count(3) is LayoutPlan.TRIPLE
    assert LayoutPlan.for_count(4) is LayoutPlan.QUAD
    with pytest.raises(EmptyImageArray):
        LayoutPlan.for_count(0)
    with pytest.raises(TooManyImages):
        LayoutPlan.for_count(5)


def test_combine_rejects_bad_counts():
    with pytest.raises(EmptyImageArray):
        combine_images([], 10, 10, FillPolicy.LETTERBOX)
    with pytest.raises(TooManyImages):
        combine_images(
            [_solid(4, 4) for _ in range(5)], 8, 8, FillPolicy.STRETCH
        )


def test_single_image_is_returned_unscaled():
    src = _solid(33, 17)
    out = combine_images([src], 999, 999, FillPolicy.LETTERBOX)
    assert out.size == (33, 17)
    assert out is not src
    assert np.array_equal(np.asarray(out), np.asarray(src))


def test_pair_side_by_side():
    places = _placements([_solid(80, 60), _solid(40, 30)], 160)
    assert [(p.x, p.y) for p in places] == [(0, 0), (80, 0)]
    assert all(p.image.size == (80, 60) for p in places)


def test_pair_canvas_pixels_follow_input_order():
    out = combine_images(
        [_solid(80, 60, RED), _solid(40, 30, BLUE)],
        160,
        60,
        FillPolicy.LETTERBOX,
        n_jobs=2,
    )
    assert out.size == (160, 60)
    assert np.allclose(_px(out, 40, 30), RED, atol=2)
    assert np.allclose(_px(out, 120, 30), BLUE, atol=2)


def test_pair_letterbox_leaves_transparent_margins():
    # Tall second image in a wide cell: margins stay transparent
    out = combine_images(
        [_solid(60, 40), _solid(10, 40)], 120, 40, FillPolicy.LETTERBOX
    )
    alpha = np.asarray(out.getchannel("A"))
    assert alpha[:, :60].min() == 255
    assert alpha[20, 62] == 0
    assert alpha[20, 90] == 255


def test_triple_bottom_row_spans_full_width():
    images = [_solid(80, 60), _solid(40, 30), _solid(20, 30)]
    places = _placements(images, 160)
    assert [(p.x, p.y) for p in places[:2]] == [(0, 0), (80, 0)]
    last = places[2]
    assert (last.x, last.y) == (0, 60)
    assert last.image.size == (160, 60)


def test_triple_stretch_fills_canvas():
    out = combine_images(
        [_solid(80, 60, RED), _solid(40, 30, GREEN), _solid(20, 30, BLUE)],
        160,
        120,
        FillPolicy.STRETCH,
    )
    assert np.asarray(out.getchannel("A")).min() == 255
    assert np.allclose(_px(out, 10, 100), BLUE, atol=2)
    assert np.allclose(_px(out, 150, 100), BLUE, atol=2)


def test_quad_grid():
    images = [_solid(50, 40), _solid(50, 40), _solid(25, 20), _solid(5, 4)]
    places = _placements(images, 100)
    assert [(p.x, p.y) for p in places] == [
        (0, 0),
        (50, 0),
        (0, 40),
        (50, 40),
    ]


def test_quad_canvas_quadrants():
    colors = [RED, GREEN, BLUE, WHITE]
    images = [_solid(50, 40, c) for c in colors]
    out = combine_images(images, 100, 80, FillPolicy.STRETCH)
    for (x, y), c in zip([(25, 20), (75, 20), (25, 60), (75, 60)], colors):
        assert np.allclose(_px(out, x, y), c, atol=2)


def test_single_plan_places_at_origin():
    places = _placements([_solid(12, 7)], 12)
    assert len(places) == 1
    assert (places[0].x, places[0].y) == (0, 0)
    assert places[0].image.size == (12, 7)


def test_tied_areas_scale_to_last_largest_image():
    # 30x10 and 10x30 share an area; the second one is the reference
    images = [_solid(30, 10, RED), _solid(10, 30, BLUE)]
    places = _placements(images, 20)
    assert [(p.x, p.y) for p in places] == [(0, 0), (10, 0)]
    assert all(p.image.size == (10, 30) for p in places)
    out = combine_images(images, 20, 30, FillPolicy.STRETCH)
    assert out.size == (20, 30)
    assert np.allclose(_px(out, 5, 15), RED, atol=2)
    assert np.allclose(_px(out, 15, 15), BLUE, atol=2)
