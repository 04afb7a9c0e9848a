import pytest

from aggregate_complaints import aggregate_records
from build_hierarchy import TreemapNode, build_hierarchy
from treemap_layout import (
    TILING_METHODS,
    compute_rectangles,
    dice,
    get_tiling_method,
    inset,
    leaf_rectangles,
    rect_area,
    slice_,
    slice_dice,
    squarify,
    worst_ratio,
)

REL_TOL = 1e-6


def assert_tiles(cells, box, values):
    """Cells stay inside the box, don't overlap, cover it, and are proportional to values"""
    x0, y0, x1, y1 = box
    box_area = rect_area(box)
    total = sum(values)
    eps = 1e-9 * max(1.0, x1 - x0, y1 - y0)

    assert len(cells) == len(values)
    for cell, value in zip(cells, values):
        cx0, cy0, cx1, cy1 = cell
        assert cx1 >= cx0 and cy1 >= cy0
        assert cx0 >= x0 - eps and cy0 >= y0 - eps
        assert cx1 <= x1 + eps and cy1 <= y1 + eps
        assert rect_area(cell) == pytest.approx(box_area * value / total, rel=REL_TOL, abs=1e-9)

    assert sum(rect_area(cell) for cell in cells) == pytest.approx(box_area, rel=REL_TOL, abs=1e-9)

    for i, a in enumerate(cells):
        for b in cells[i + 1:]:
            overlap_x = min(a[2], b[2]) - max(a[0], b[0])
            overlap_y = min(a[3], b[3]) - max(a[1], b[1])
            assert overlap_x <= eps or overlap_y <= eps


@pytest.mark.parametrize('tile', [squarify, slice_dice, dice, slice_])
@pytest.mark.parametrize('values', [
    [6, 6, 4, 3, 2, 2, 1],
    [1],
    [100, 1, 1],
    [5, 5, 5, 5],
])
def test_tiling_covers_box_proportionally(tile, values):
    box = (3.0, 7.0, 403.0, 207.0)
    assert_tiles(tile(values, *box), box, values)


def test_squarify_tall_box():
    values = [9, 7, 5, 3, 1]
    box = (0.0, 0.0, 50.0, 600.0)
    assert_tiles(squarify(values, *box), box, values)


def test_squarify_improves_aspect_ratio_over_dice():
    values = [6, 6, 4, 3, 2, 2, 1]
    box = (0.0, 0.0, 600.0, 400.0)

    def worst(cells):
        return max(max((c[2] - c[0]) / (c[3] - c[1]), (c[3] - c[1]) / (c[2] - c[0])) for c in cells)

    assert worst(squarify(values, *box)) < worst(dice(values, *box))


def test_squarify_degenerate_box_does_not_raise():
    cells = squarify([3, 2], 10.0, 10.0, 10.0, 50.0)
    assert len(cells) == 2
    assert all(rect_area(cell) == 0 for cell in cells)


def test_zero_values():
    assert squarify([], 0, 0, 10, 10) == []
    cells = squarify([0, 0], 0.0, 0.0, 10.0, 10.0)
    assert len(cells) == 2
    assert all(c[2] >= c[0] and c[3] >= c[1] for c in cells)


def test_dice_and_slice_directions():
    assert dice([1, 3], 0, 0, 8, 2) == [(0, 0, 2.0, 2), (2.0, 0, 8, 2)]
    assert slice_([1, 3], 0, 0, 2, 8) == [(0, 0, 2, 2.0), (0, 2.0, 2, 8)]


def test_worst_ratio():
    assert worst_ratio([4], 2) == pytest.approx(1.0)
    assert worst_ratio([], 2) == float('inf')
    assert worst_ratio([0], 2) == float('inf')


def test_inset_never_inverts():
    assert inset((0, 0, 10, 10), 1) == (1, 1, 9, 9)
    assert inset((0, 0, 1, 10), 1) == (0.5, 1, 0.5, 9)
    assert inset((0, 0, 1, 1), 5) == (0.5, 0.5, 0.5, 0.5)


def test_get_tiling_method():
    for name, method in TILING_METHODS.items():
        assert get_tiling_method(name) is method
    with pytest.raises(ValueError):
        get_tiling_method('spiral')


def children_of(rects, parent):
    return [r for r in rects if r['depth'] == parent['depth'] + 1 and r['parent'] == parent['label']]


@pytest.mark.parametrize('tile', list(TILING_METHODS.values()))
@pytest.mark.parametrize('padding', [0, 1, 3])
def test_children_tile_parent_interior(park_records, tile, padding):
    root = build_hierarchy(aggregate_records(park_records))
    rects = compute_rectangles(root, 960, 600, padding=padding, tile=tile)

    for parent in rects:
        if parent['type'] == 'leaf':
            continue
        interior = inset((parent['x0'], parent['y0'], parent['x1'], parent['y1']), padding / 2)
        children = children_of(rects, parent)
        assert children
        assert_tiles([child['cell'] for child in children], interior, [child['value'] for child in children])
        for child in children:
            assert (child['x0'], child['y0'], child['x1'], child['y1']) == inset(child['cell'], padding / 2)


def test_rect_metadata(scenario_records):
    root = build_hierarchy(aggregate_records(scenario_records))
    rects = compute_rectangles(root, 300, 200)

    assert [r['type'] for r in rects] == ['root', 'group', 'leaf', 'group', 'leaf']
    assert rects[0]['label'] is None
    assert (rects[0]['x0'], rects[0]['y0'], rects[0]['x1'], rects[0]['y1']) == (0.0, 0.0, 300.0, 200.0)

    leaves = leaf_rectangles(rects)
    assert [(r['label'], r['parent'], r['value']) for r in leaves] == [
        ('Dog off leash', 'BRONX', 2),
        ('Loud music', 'QUEENS', 1),
    ]
    for rect in rects:
        assert rect['x1'] >= rect['x0']
        assert rect['y1'] >= rect['y0']


def test_bronx_gets_two_thirds_of_area(scenario_records):
    root = build_hierarchy(aggregate_records(scenario_records))
    rects = compute_rectangles(root, 300, 200, padding=0)
    bronx, queens = [r for r in rects if r['type'] == 'group']
    assert rect_area(bronx['cell']) == pytest.approx(2 * rect_area(queens['cell']), rel=REL_TOL)


def test_empty_tree_gives_no_rectangles():
    root = build_hierarchy({})
    assert compute_rectangles(root, 800, 600) == []


def test_large_padding_collapses_instead_of_inverting():
    root = build_hierarchy({'BRONX': {'a': 1, 'b': 1, 'c': 1}, 'QUEENS': {'d': 1}})
    rects = compute_rectangles(root, 10, 4, padding=6)
    for rect in rects:
        assert rect['x1'] >= rect['x0']
        assert rect['y1'] >= rect['y0']
    assert len(leaf_rectangles(rects)) == 4


def test_invalid_size_rejected():
    root = TreemapNode(None, children=[TreemapNode('BRONX', children=[TreemapNode('a', 1)])])
    with pytest.raises(ValueError):
        compute_rectangles(root, 0, 100)
    with pytest.raises(ValueError):
        compute_rectangles(root, 100, -5)
    with pytest.raises(ValueError):
        compute_rectangles(root, 100, 100, padding=-1)


def test_layout_is_idempotent(park_records):
    root = build_hierarchy(aggregate_records(park_records))
    assert compute_rectangles(root, 960, 600) == compute_rectangles(root, 960, 600)
