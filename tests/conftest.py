"""Shared polygon fixtures."""

import pytest

from skeletonizer.domain import Vector2
from polygons import CONVEX_CORPUS, CORPUS


@pytest.fixture(params=sorted(CONVEX_CORPUS))
def convex_polygon(request: pytest.FixtureRequest) -> list[Vector2]:
    """Each convex polygon of the corpus in turn."""
    return list(CONVEX_CORPUS[request.param])


@pytest.fixture(params=sorted(CORPUS))
def any_polygon(request: pytest.FixtureRequest) -> list[Vector2]:
    """Each polygon of the corpus in turn."""
    return list(CORPUS[request.param])
