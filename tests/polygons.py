"""Named test polygons.

All polygons are listed clockwise in y-up coordinates.
"""

import math

from skeletonizer.domain import Vector2


def polygon(*points: tuple[float, float]) -> list[Vector2]:
    return [Vector2(float(x), float(y)) for x, y in points]


TRIANGLE = polygon((0, 0), (2, 4), (4, 0))
SQUARE = polygon((0, 0), (0, 2), (2, 2), (2, 0))
RECTANGLE = polygon((0, 0), (0, 2), (4, 2), (4, 0))
HOUSE = polygon((3, 9), (6, 6), (6, 0), (0, 0), (0, 6))
SYMMETRICAL_OCTAGON = polygon((0, 3), (0, 6), (3, 9), (6, 9), (9, 6), (9, 3), (6, 0), (3, 0))
DEFAULT_PENTAGON = polygon((250, 250), (300, 450), (500, 450), (550, 250), (400, 100))
RIGHT_TRIANGLE_EVEN = polygon((0, 0), (0, 4), (4, 0))
RIGHT_TRIANGLE_ACUTE = polygon((0, 0), (0, 1), (10, 0))
EQUILATERAL = polygon((0, 0), (1, math.sqrt(3)), (2, 0))
ISOSCELES_NARROW = polygon((0, 0), (1, 10), (2, 0))
ISOSCELES_WIDE = polygon((0, 0), (5, 1), (10, 0))

# Rectilinear shapes with unit-width arms
L_SHAPE = polygon((0, 0), (0, 4), (2, 4), (2, 2), (4, 2), (4, 0))
NOTCHED_SQUARE = polygon((0, 0), (0, 4), (4, 4), (4, 0), (2, 1))
T_SHAPE = polygon((0, 2), (0, 3), (3, 3), (3, 2), (2, 2), (2, 0), (1, 0), (1, 2))
H_SHAPE = polygon(
    (0, 0), (0, 3), (1, 3), (1, 2), (2, 2), (2, 3), (3, 3), (3, 0), (2, 0), (2, 1), (1, 1), (1, 0)
)
E_SHAPE = polygon(
    (0, 0), (0, 5), (3, 5), (3, 4), (1, 4), (1, 3), (3, 3), (3, 2), (1, 2), (1, 1), (3, 1), (3, 0)
)
COMB = polygon(
    (0, 0), (0, 4), (1, 4), (1, 1), (2, 1), (2, 4), (3, 4), (3, 1), (4, 1), (4, 4), (5, 4), (5, 0)
)

# Irregular polygons whose earlier solves were wrong or incomplete
AWKWARD_HEXAGON = polygon(
    (250, 250),
    (300, 450),
    (500, 450),
    (740, 201),
    (572.8069677084923, 148.66030511340506),
    (400, 100),
)
AWKWARD_HEPTAGON = polygon(
    (250, 250),
    (300, 450),
    (500, 450),
    (562.2692018374426, 407.2957030936534),
    (740, 201),
    (616.8069677084923, 263.66030511340506),
    (519, 201),
)
IMPOSSIBLE_OCTAGON = polygon(
    (316.9999990463257, 219.00000095367432),
    (250, 250),
    (300, 450),
    (500, 450),
    (577, 372),
    (605.5056829452515, 334.50568294525146),
    (580.5056829452515, 205.50568294525146),
    (396, 214),
)
BROKEN_POLYGON = polygon(
    (342, 305),
    (231.4124715468463, 348.6498861873851),
    (219, 490),
    (573.9551266342539, 440.59680388705004),
    (655, 453),
    (680, 232),
    (572.4959638502904, 228.0766686722798),
    (421, 169),
)
CRAZY_POLYGON = polygon(
    (250, 250),
    (300, 450),
    (500, 450),
    (537.7868459349927, 389.0072879736522),
    (572.2271765542667, 326.21280723459523),
    (546.1435543836416, 249.6495408920134),
    (488.47201260232487, 273.35264679006406),
    (455.1750427158221, 327.2846666246924),
)


def _duck_octagon(corner: tuple[float, float]) -> list[Vector2]:
    return polygon(
        (250, 250),
        (300, 450),
        (500, 450),
        (537.7868459349927, 389.0072879736522),
        corner,
        (550, 250),
        (467.4049832435403, 279.6927706527311),
        (463.22970791151425, 329.54084645230455),
    )


def _moorhen(corner: tuple[float, float]) -> list[Vector2]:
    return polygon(
        (250, 250),
        (300, 450),
        (500, 450),
        (537.7868459349927, 389.0072879736522),
        corner,
        (546.1435543836416, 249.6495408920134),
        (467.4049832435403, 279.6927706527311),
        (463.22970791151425, 329.54084645230455),
    )


def _bisector_seven(corner: tuple[float, float]) -> list[Vector2]:
    return polygon(
        (250, 250),
        (300, 450),
        (500, 450),
        (537.7868459349927, 389.0072879736522),
        (563.5349625429404, 323.89572222311347),
        (546.1435543836416, 249.6495408920134),
        corner,
        (455.1750427158221, 327.2846666246924),
    )


DUCK_OCTAGON_FAILS = _duck_octagon((543.0847949300253, 312.1588784047538))
DUCK_OCTAGON_PASSES = _duck_octagon((538.8862285081377, 312.62538578496356))
MOORHEN_FAILS = _moorhen((537.8786984523035, 303.9189565813133))
MOORHEN_PASSES = _moorhen((537.8786984523035, 308.9545027997076))
BISECTOR_SEVEN_FAILURE = _bisector_seven((483.2132231254724, 280.36182894979646))
BISECTOR_SEVEN_SUCCESS = _bisector_seven((490.22494242794227, 278.6095334098634))
MISSING_EDGE_AT_NODE_11 = polygon(
    (433.2906905266034, 257.92821528584113),
    (370.16856653872605, 341.6863823154601),
    (300, 450),
    (500, 450),
    (487.97161513206436, 390.12654441469925),
    (503.88628075513344, 204.6069399530199),
    (523.1215950226947, 142.44260513750308),
    (400, 100),
)
CAUSES_MISSING_SECONDARY_EDGE = polygon(
    (234.29069052660338, 260.92821528584113),
    (300, 450),
    (500, 450),
    (491.6079787684279, 391.94472623288107),
    (503.88628075513344, 204.6069399530199),
    (523.1215950226947, 142.44260513750308),
    (400, 100),
)
NOT_SOLVABLE = polygon(
    (250, 250),
    (300, 450),
    (500, 450),
    (493.6570191345232, 391.26171277751615),
    (472.53465226813836, 333.33046132650566),
    (508.7783124600281, 145.1746589589634),
    (400, 100),
)
WRONG_COLLISION_AT_NODE_10 = polygon(
    (234.29069052660338, 260.92821528584113),
    (300, 450),
    (500, 450),
    (491.6079787684279, 391.94472623288107),
    (506.6853250363918, 208.33899899469776),
    (523.1215950226947, 142.44260513750308),
    (400, 100),
)

CONVEX_CORPUS = {
    "triangle": TRIANGLE,
    "square": SQUARE,
    "rectangle": RECTANGLE,
    "house": HOUSE,
    "symmetrical_octagon": SYMMETRICAL_OCTAGON,
    "default_pentagon": DEFAULT_PENTAGON,
    "right_triangle_even": RIGHT_TRIANGLE_EVEN,
    "right_triangle_acute": RIGHT_TRIANGLE_ACUTE,
    "equilateral": EQUILATERAL,
    "isosceles_narrow": ISOSCELES_NARROW,
    "isosceles_wide": ISOSCELES_WIDE,
}

REFLEX_CORPUS = {
    "l_shape": L_SHAPE,
    "notched_square": NOTCHED_SQUARE,
    "t_shape": T_SHAPE,
    "h_shape": H_SHAPE,
    "e_shape": E_SHAPE,
    "comb": COMB,
}

REGRESSION_CORPUS = {
    "awkward_hexagon": AWKWARD_HEXAGON,
    "awkward_heptagon": AWKWARD_HEPTAGON,
    "impossible_octagon": IMPOSSIBLE_OCTAGON,
    "broken_polygon": BROKEN_POLYGON,
    "crazy_polygon": CRAZY_POLYGON,
    "duck_octagon_fails": DUCK_OCTAGON_FAILS,
    "duck_octagon_passes": DUCK_OCTAGON_PASSES,
    "moorhen_fails": MOORHEN_FAILS,
    "moorhen_passes": MOORHEN_PASSES,
    "bisector_seven_failure": BISECTOR_SEVEN_FAILURE,
    "bisector_seven_success": BISECTOR_SEVEN_SUCCESS,
    "missing_edge_at_node_11": MISSING_EDGE_AT_NODE_11,
    "causes_missing_secondary_edge": CAUSES_MISSING_SECONDARY_EDGE,
    "not_solvable": NOT_SOLVABLE,
    "wrong_collision_at_node_10": WRONG_COLLISION_AT_NODE_10,
}

CORPUS = {**CONVEX_CORPUS, **REFLEX_CORPUS, **REGRESSION_CORPUS}
