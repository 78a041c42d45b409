import math

import numpy as np
import pytest

from gridfield.exceptions import InvalidGeometryError
from gridfield.geometry import BoxBoundary, Circle, Geometry, Grid


@pytest.mark.parametrize("nx, ny", [(0, 3), (3, 0), (0, 0), (-1, 4)])
def test_empty_or_negative_grid_rejected(nx: int, ny: int) -> None:
    with pytest.raises(InvalidGeometryError):
        Grid(nx=nx, ny=ny, x_min=0.0, x_max=1.0, y_min=0.0, y_max=1.0)


@pytest.mark.parametrize("nx", [2.5, "3", True, None])
def test_non_integer_size_rejected(nx) -> None:
    with pytest.raises(InvalidGeometryError):
        Grid(nx=nx, ny=3, x_min=0.0, x_max=1.0, y_min=0.0, y_max=1.0)


def test_integral_float_size_is_accepted() -> None:
    g = Grid(nx=4.0, ny=np.int64(2), x_min=0, x_max=1, y_min=0, y_max=1)
    assert g.nx == 4 and isinstance(g.nx, int)
    assert g.ny == 2 and isinstance(g.ny, int)


@pytest.mark.parametrize(
    "bounds",
    [
        (1.0, 1.0, 0.0, 1.0),
        (2.0, 1.0, 0.0, 1.0),
        (0.0, 1.0, 3.0, 3.0),
        (0.0, math.inf, 0.0, 1.0),
        (math.nan, 1.0, 0.0, 1.0),
    ],
)
def test_degenerate_bounds_rejected(bounds) -> None:
    x_min, x_max, y_min, y_max = bounds
    with pytest.raises(InvalidGeometryError):
        Grid(nx=3, ny=3, x_min=x_min, x_max=x_max, y_min=y_min, y_max=y_max)


def test_invalid_geometry_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        Grid(nx=0, ny=3, x_min=0.0, x_max=1.0, y_min=0.0, y_max=1.0)


def test_spacing_and_node_coordinates() -> None:
    g = Grid(nx=4, ny=2, x_min=-1.0, x_max=3.0, y_min=0.0, y_max=1.0)
    assert g.dx == pytest.approx(1.0)
    assert g.dy == pytest.approx(0.5)
    assert g.n_unknowns == 8
    np.testing.assert_allclose(g.x_nodes(), [-1.0, 0.0, 1.0, 2.0])
    np.testing.assert_allclose(g.y_nodes(), [0.0, 0.5])
    assert g.x_of(2) == pytest.approx(1.0)
    assert g.y_of(1) == pytest.approx(0.5)
    # out-of-range neighbours still map to a coordinate
    assert g.x_of(-1) == pytest.approx(-2.0)


def test_negative_radius_rejected_zero_radius_allowed() -> None:
    with pytest.raises(InvalidGeometryError):
        Circle(center_x=0.0, center_y=0.0, radius=-0.1, value=1.0)
    c = Circle(center_x=1.0, center_y=2.0, radius=0.0, value=1.0)
    assert c.contains(1.0, 2.0)
    assert not c.contains(1.0, 2.0 + 1e-12)


def test_circle_contains_boundary_inclusive() -> None:
    c = Circle(center_x=0.0, center_y=0.0, radius=1.0, value=0.0)
    assert c.contains(1.0, 0.0)
    assert c.contains(0.0, -1.0)
    assert not c.contains(1.0, 0.1)


def test_geometry_is_read_only_and_keeps_circle_order() -> None:
    grid = Grid(nx=2, ny=2, x_min=0.0, x_max=1.0, y_min=0.0, y_max=1.0)
    circles = [Circle(0, 0, 1, 1.0), Circle(0, 0, 1, 2.0)]
    geom = Geometry(grid=grid, box=BoxBoundary(), circles=circles)

    assert isinstance(geom.circles, tuple)
    assert [c.value for c in geom.circles] == [1.0, 2.0]

    circles.append(Circle(0, 0, 1, 3.0))
    assert len(geom.circles) == 2

    with pytest.raises(AttributeError):
        geom.grid = grid  # type: ignore[misc]


def test_geometry_rejects_wrong_types() -> None:
    grid = Grid(nx=2, ny=2, x_min=0.0, x_max=1.0, y_min=0.0, y_max=1.0)
    with pytest.raises(InvalidGeometryError):
        Geometry(grid=grid, circles=((0.0, 0.0, 1.0, 1.0),))  # type: ignore[arg-type]


def test_from_parts_accepts_tuples() -> None:
    geom = Geometry.from_parts(
        nx=3,
        ny=2,
        bounds=(0.0, 3.0, 0.0, 2.0),
        box=(1.0, 2.0, 3.0, 4.0),
        circles=[(1.0, 1.0, 0.5, 9.0)],
    )
    assert geom.box == BoxBoundary(top=1.0, bottom=2.0, left=3.0, right=4.0)
    assert geom.circles == (Circle(1.0, 1.0, 0.5, 9.0),)
    assert geom.n_unknowns == 6
    assert geom.index.nx == 3 and geom.index.ny == 2
