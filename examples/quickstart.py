from __future__ import annotations


def main() -> None:
    # [START README_QUICKSTART]
    from gridfield import BoxBoundary, Circle, Geometry, Grid, solve_field

    grid = Grid(nx=40, ny=40, x_min=0.0, x_max=10.0, y_min=0.0, y_max=10.0)
    box = BoxBoundary(top=1.0, bottom=0.0, left=0.0, right=0.0)
    circles = (Circle(center_x=5.0, center_y=5.0, radius=1.5, value=0.25),)

    sol = solve_field(Geometry(grid=grid, box=box, circles=circles))

    print("field shape (ny, nx):", sol.field.shape)
    print("value at centre:", sol.value_at(20, 20))
    print("solve time [ms]:", round(sol.solve_ms, 3))
    # [END README_QUICKSTART]


if __name__ == "__main__":
    main()
