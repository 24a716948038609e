"""
MenuRelay Backend — Face Bounding-Box Normalizer
==================================================

What:  Converts face-detection annotations into axis-aligned rectangles.
How:   Collects the x and y extremes of each annotation's bounding polygon,
       emits one rectangle per usable annotation, and sorts by x.
Who:   Called by FaceService after the vision call returns.

Input shapes:
    Annotations arrive either as Cloud Vision `FaceAnnotation` messages
    (attribute access, snake_case) or as mappings decoded from REST JSON
    (key access, camelCase). `_field()` reads both. Any level may be missing:
    no polygon, no vertices, vertices without x or y.

x and y extremes are collected independently, so a vertex with only an x
still widens the horizontal range. A polygon whose x values and y values come
from different vertices can therefore yield a zero-area rectangle.
"""

import math
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, Sequence

from menurelay.schemas.relay import FaceRect


def _field(obj: Any, *names: str) -> Any:
    """Return the first present attribute/key among `names`, else None."""
    if obj is None:
        return None
    for name in names:
        if isinstance(obj, Mapping):
            if name in obj:
                return obj[name]
        else:
            value = getattr(obj, name, None)
            if value is not None:
                return value
    return None


def _is_number(value: Any) -> bool:
    # bool is an int subclass; True/False are not coordinates
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _vertices(annotation: Any) -> Sequence[Any]:
    poly = _field(annotation, "bounding_poly", "boundingPoly")
    vertices = _field(poly, "vertices")
    if vertices is None or isinstance(vertices, (str, bytes, Mapping)):
        return ()
    try:
        return list(vertices)
    except TypeError:
        return ()


def annotation_to_rect(annotation: Any) -> Optional[FaceRect]:
    """
    Build the rectangle for one annotation.

    Returns None when no vertex supplies a numeric x, or none supplies a
    numeric y.
    """
    xs: List[float] = []
    ys: List[float] = []
    for vertex in _vertices(annotation):
        x = _field(vertex, "x")
        y = _field(vertex, "y")
        if _is_number(x):
            xs.append(x)
        if _is_number(y):
            ys.append(y)

    if not xs or not ys:
        return None

    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)
    return FaceRect(x=min_x, y=min_y, w=max_x - min_x, h=max_y - min_y)


def faces_to_rects(annotations: Optional[Iterable[Any]]) -> List[FaceRect]:
    """
    Normalize face annotations into rectangles sorted ascending by x.

    Annotations without usable vertices are dropped. `sorted` is stable, so
    rectangles sharing an x keep the order the detector reported them in.
    Never raises for missing or malformed sub-fields.
    """
    rects = []
    for annotation in annotations or ():
        rect = annotation_to_rect(annotation)
        if rect is not None:
            rects.append(rect)
    return sorted(rects, key=lambda rect: rect.x)
