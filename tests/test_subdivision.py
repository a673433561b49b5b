import pytest
from hypothesis import given, settings
from hypothesis.strategies import booleans, integers, sampled_from

from core.seed import RNG
from core.shapes import SHAPE_KINDS, polygon_area, base_outline, check_outline
from core.subdivision import (SubdivisionParams, subdivide, expected_total_units,
                              branching_factor, top_level_regions, total_units)

MAX_DEPTH = {"triangle": 4, "square": 4, "hexagon": 3, "circle": 5}


@settings(max_examples=60, deadline=None)
@given(kind=sampled_from(SHAPE_KINDS), depth=integers(0, 5), partial=booleans(), seed=integers(0, 2**32))
def test_weight_conservation(kind: str, depth: int, partial: bool, seed: int) -> None:
    depth = min(depth, MAX_DEPTH[kind])
    cells = subdivide(kind, depth, partial, RNG(seed))
    expected = branching_factor(kind) ** depth * top_level_regions(kind)
    assert total_units(cells) == expected == expected_total_units(kind, depth)


@settings(max_examples=60, deadline=None)
@given(kind=sampled_from(SHAPE_KINDS), depth=integers(0, 3), partial=booleans(), seed=integers(0, 2**32))
def test_cells_are_positive_and_non_degenerate(kind: str, depth: int, partial: bool, seed: int) -> None:
    for cell in subdivide(kind, depth, partial, RNG(seed)):
        assert isinstance(cell.units, int) and cell.units >= 1
        assert len(cell.points) >= 3
        assert abs(polygon_area(cell.points)) > 1e-6


def test_square_depth_one_gives_four_unit_cells() -> None:
    cells = subdivide("square", 1, False, RNG(1))
    assert len(cells) == 4
    assert all(c.units == 1 for c in cells)
    assert total_units(cells) == 4
    assert all(len(c.points) == 4 for c in cells)


def test_triangle_depth_two_gives_sixteen_unit_cells() -> None:
    cells = subdivide("triangle", 2, False, RNG(1))
    assert len(cells) == 16
    assert all(c.units == 1 for c in cells)
    assert total_units(cells) == 16


def test_regular_cells_share_the_area_evenly() -> None:
    base = abs(polygon_area(base_outline("triangle")))
    cells = subdivide("triangle", 2, False, RNG(1))
    for c in cells:
        assert abs(polygon_area(c.points)) == pytest.approx(base / 16)


def test_hexagon_and_circle_top_level_regions() -> None:
    assert len(subdivide("hexagon", 0, False, RNG(1))) == 6
    assert len(subdivide("hexagon", 1, False, RNG(1))) == 24
    assert len(subdivide("circle", 2, False, RNG(1))) == 24


def test_circle_sector_polygon_follows_arc_segments() -> None:
    params = SubdivisionParams(circle_sectors=4, arc_segments=7)
    cells = subdivide("circle", 1, False, RNG(1), params)
    assert len(cells) == 8
    assert all(len(c.points) == 7 + 2 for c in cells)
    assert total_units(cells) == expected_total_units("circle", 1, params)


def test_partial_produces_coarser_cells_for_some_seed() -> None:
    sizes = set()
    for seed in range(20):
        sizes.update(c.units for c in subdivide("square", 2, True, RNG(seed)))
    assert 4 in sizes and 1 in sizes


def test_partial_never_collapses_single_region_base() -> None:
    for seed in range(30):
        assert len(subdivide("triangle", 2, True, RNG(seed))) >= 4
        assert len(subdivide("square", 1, True, RNG(seed))) == 4


def test_partial_is_reproducible_with_same_seed() -> None:
    a = subdivide("hexagon", 2, True, RNG("abc"))
    b = subdivide("hexagon", 2, True, RNG("abc"))
    assert a == b


def test_certain_continue_probability_matches_full_subdivision() -> None:
    params = SubdivisionParams(continue_probability=1.0)
    assert len(subdivide("square", 2, True, RNG(5), params)) == 16


@pytest.mark.parametrize("kind, depth", [("square", -1), ("pentagon", 1)])
def test_invalid_arguments_raise(kind: str, depth: int) -> None:
    with pytest.raises(ValueError):
        subdivide(kind, depth, False, RNG(1))


def test_check_outline_rejects_wrong_vertex_count() -> None:
    with pytest.raises(ValueError):
        check_outline("triangle", [(0, 0), (1, 0), (1, 1), (0, 1)])
    with pytest.raises(ValueError):
        check_outline("triangle", [(0, 0), (1, 1), (2, 2)])


def test_single_sector_circle_never_collapses_to_one_cell() -> None:
    params = SubdivisionParams(circle_sectors=1)
    for seed in range(50):
        cells = subdivide("circle", 2, True, RNG(seed), params)
        assert len(cells) >= 2
        assert total_units(cells) == 4
