#!/usr/bin/env python3
"""
Treemap layout: assign every node of the hierarchy a rectangle whose area
is proportional to its value among its siblings.

Tiling functions share one signature:

    tile(values, x0, y0, x1, y1) -> [(x0, y0, x1, y1), ...]

returning one cell per value, in the same order, that together cover the
box exactly. compute_rectangles() applies a tiling function recursively
and handles the padding between nested boxes.
"""


def inset(rect, amount):
    """Shrink a rectangle on all sides, collapsing to its midline instead of inverting"""
    x0, y0, x1, y1 = rect
    x0 += amount
    y0 += amount
    x1 -= amount
    y1 -= amount
    if x1 < x0:
        x0 = x1 = (x0 + x1) / 2
    if y1 < y0:
        y0 = y1 = (y0 + y1) / 2
    return (x0, y0, x1, y1)


def rect_area(rect):
    x0, y0, x1, y1 = rect
    return (x1 - x0) * (y1 - y0)


def dice(values, x0, y0, x1, y1):
    """Split the box left to right"""
    total = sum(values)
    k = (x1 - x0) / total if total else 0
    cells = []
    x = x0
    for i, value in enumerate(values):
        next_x = x + value * k
        if total and i == len(values) - 1:
            next_x = x1
        cells.append((x, y0, next_x, y1))
        x = next_x
    return cells


def slice_(values, x0, y0, x1, y1):
    """Split the box top to bottom"""
    total = sum(values)
    k = (y1 - y0) / total if total else 0
    cells = []
    y = y0
    for i, value in enumerate(values):
        next_y = y + value * k
        if total and i == len(values) - 1:
            next_y = y1
        cells.append((x0, y, x1, next_y))
        y = next_y
    return cells


def slice_dice(values, x0, y0, x1, y1):
    """Dice wide boxes, slice tall ones"""
    if x1 - x0 >= y1 - y0:
        return dice(values, x0, y0, x1, y1)
    return slice_(values, x0, y0, x1, y1)


def worst_ratio(row, side):
    """
    Worst aspect ratio of a row of areas laid along a side of the given length
    (1 is a perfect square; larger is worse)
    """
    if not row or side <= 0:
        return float('inf')
    row_area = sum(row)
    min_area = min(row)
    max_area = max(row)
    if row_area <= 0 or min_area <= 0:
        return float('inf')
    side_sq = side * side
    return max(side_sq * max_area / (row_area ** 2), (row_area ** 2) / (side_sq * min_area))


def _layout_row(row, x0, y0, x1, y1, is_last):
    """
    Lay a row of areas along the shorter side of the box.
    Returns the row's cells and the box left over for the next row.
    """
    row_area = sum(row)
    dx = x1 - x0
    dy = y1 - y0
    if dx >= dy:
        # wide box - column on the left
        thickness = row_area / dy if dy > 0 else 0
        edge = x1 if is_last else min(x0 + thickness, x1)
        return slice_(row, x0, y0, edge, y1), (edge, y0, x1, y1)

    # tall box - row along the top
    thickness = row_area / dx if dx > 0 else 0
    edge = y1 if is_last else min(y0 + thickness, y1)
    return dice(row, x0, y0, x1, edge), (x0, edge, x1, y1)


def squarify(values, x0, y0, x1, y1):
    """
    Squarified treemap tiling (Bruls, Huizing, van Wijk).

    Values are taken in order and grouped into rows; a value joins the
    current row as long as that does not make the row's worst aspect ratio
    any worse. Expects values sorted descending for the best result.
    """
    values = list(values)
    if not values:
        return []

    total = sum(values)
    dx = x1 - x0
    dy = y1 - y0
    if total <= 0 or dx <= 0 or dy <= 0:
        return slice_dice(values, x0, y0, x1, y1)

    scale = dx * dy / total
    areas = [value * scale for value in values]

    cells = []
    box = (x0, y0, x1, y1)
    row = []
    for area in areas:
        side = min(box[2] - box[0], box[3] - box[1])
        if not row or worst_ratio(row + [area], side) <= worst_ratio(row, side):
            row.append(area)
        else:
            row_cells, box = _layout_row(row, *box, is_last=False)
            cells.extend(row_cells)
            row = [area]

    row_cells, box = _layout_row(row, *box, is_last=True)
    cells.extend(row_cells)
    return cells


TILING_METHODS = {
    'squarify': squarify,
    'slice_dice': slice_dice,
    'dice': dice,
    'slice': slice_,
}


def get_tiling_method(name):
    try:
        return TILING_METHODS[name]
    except KeyError:
        raise ValueError(f"Unknown tiling method {name!r}, expected one of {sorted(TILING_METHODS)}") from None


def compute_rectangles(root, width, height, padding=1, tile=None):
    """
    Lay out the hierarchy inside a width x height box.

    Padding is applied half inside the parent and half around each child,
    so siblings end up `padding` apart and `padding` in from their parent's
    edge. Returns a flat pre-order list of rect dicts (root first); the
    'cell' of each child is its pre-padding tile, and the cells of a
    node's children exactly cover the node's rect inset by padding / 2.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Treemap size must be positive, got {width} x {height}")
    if padding < 0:
        raise ValueError(f"Padding must be non-negative, got {padding}")
    tile = tile or squarify

    rects = []
    if root.is_leaf or root.value <= 0:
        return rects

    bounds = (0.0, 0.0, float(width), float(height))
    rects.append(_make_rect(root, None, 0, 0, 1, bounds, bounds))
    _position_children(root, bounds, 0, padding, tile, rects)
    return rects


def _position_children(node, rect, depth, padding, tile, rects):
    interior = inset(rect, padding / 2)
    cells = tile([child.value for child in node.children], *interior)
    for index, (child, cell) in enumerate(zip(node.children, cells)):
        child_rect = inset(cell, padding / 2)
        rects.append(_make_rect(child, node.label, depth + 1, index, len(node.children), cell, child_rect))
        if child.children:
            _position_children(child, child_rect, depth + 1, padding, tile, rects)


def _make_rect(node, parent_label, depth, index, siblings, cell, rect):
    if depth == 0:
        node_type = 'root'
    elif node.is_leaf:
        node_type = 'leaf'
    else:
        node_type = 'group'

    x0, y0, x1, y1 = rect
    return {
        'label': node.label,
        'value': node.value,
        'parent': parent_label,
        'depth': depth,
        'type': node_type,
        'index': index,
        'siblings': siblings,
        'x0': x0,
        'y0': y0,
        'x1': x1,
        'y1': y1,
        'cell': cell,
    }


def leaf_rectangles(rects):
    """Only the leaf rects - the ones that get drawn"""
    return [rect for rect in rects if rect['type'] == 'leaf']
