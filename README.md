# gridglue

Geometric building blocks for coupling two grids whose surfaces or volumes
lie close together but whose meshes do not match: intersection points of
pairs of simplices, projection of one surface simplex onto another along
normals, and the splitting of elements into simplices.

## Modules

- `gridglue.geometry`: small vector helpers.
  - `cross_product(a, b)`: the cross product of two 3-vectors; any other
    size raises `NotImplementedError`.
  - `corner(c, dim)`: corner `c` of the standard simplex as a `dim`-vector.
  - `edge_to_corners(edge)`: the corner pair of triangle edge 0, 1 or 2;
    other numbers raise `ValueError`.
  - `interpolate(x, corners)`: maps barycentric coordinates `x` onto the
    simplex spanned by `corners`.
  - `interpolate_unit_normals(x, normals)`: linear interpolation of corner
    normals, rescaled to unit length.
  - `inside(x, epsilon)`: whether `x` lies in the standard simplex up to
    `epsilon`; the last entry of `x` (a distance) is ignored.
- `gridglue.projection`: `Projection(overlap=0.0, max_normal_product=-0.1)`
  projects a segment (2D) or triangle (3D) onto another along normals given
  at the corners. After `project(corners, normals)`, where both arguments
  are pairs (preimage, image), the object offers:
  - `images`: the images of the preimage corners and the preimages of the
    image corners, in barycentric coordinates whose last entry is the
    signed distance along the normal;
  - `success`: per corner, whether the projection and the inverse
    projection are feasible;
  - `edge_intersections`: a list of `EdgeIntersection` records (3D only),
    each with the pair of edge numbers `edge` and the pair of local
    coordinates `local`;
  - `projection_valid`: whether every preimage corner reached the image
    plane.

  The tolerance used for comparisons is the `epsilon` attribute
  (default `1e-12`). Reading the results before `project` has run raises
  `RuntimeError`; corners or normals of the wrong shape raise `ValueError`.
- `gridglue.simplex_points`: `IntersectionPoints`, the result type of all
  intersection routines. `points` holds the distinct intersection points,
  `x_faces[f]` and `y_faces[f]` the indices of the points lying on face `f`
  of the first and second simplex; `add_point` merges points that coincide
  up to a relative tolerance. Also `point_point`, `point_segment`,
  `point_triangle` and `point_tetrahedron`.
- `gridglue.simplex_segments`: `segment_segment` (1D, 2D and 3D) and
  `segment_triangle` (2D and 3D).
- `gridglue.simplex_volumes`: `segment_tetrahedron`, `triangle_triangle`
  and `triangle_tetrahedron`.
- `gridglue.simplex_methods`: `tetrahedron_tetrahedron`, and
  `compute_intersection_points(x, y)`, which picks the routine from the
  number of corners of each argument (1 to 4). In its result `x_faces`
  always refers to `x` and `y_faces` to `y`.

  Every intersection routine returns `None` when the simplices do not
  intersect.
- `gridglue.subdivision`: `simplex_subdivision(dim, element_corners)`
  returns `(sub_elements, face_ids)`: the local corner numbers of each
  simplex, and for each simplex face the element face it lies on (`-1` for
  faces inside the element). Quadrilaterals become two triangles,
  hexahedra five tetrahedra.

## Installing

```
pip install .
pip install ".[test]"
```

## Examples

Projecting a triangle onto a parallel one above it:

```python
from gridglue.projection import Projection

corners = (
    [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]],
    [[0.0, 0.0, 1.0], [1.0, 0.0, 1.0], [0.0, 1.0, 1.0]],
)
normals = (
    [[0.0, 0.0, 1.0]] * 3,
    [[0.0, 0.0, -1.0]] * 3,
)

projection = Projection(0.0, -0.1)
projection.project(corners, normals)
images, preimages = projection.images
print(projection.success)
```

Intersecting two triangles in the plane:

```python
from gridglue.simplex_methods import compute_intersection_points

result = compute_intersection_points(
    [[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]],
    [[0.5, 0.0], [1.5, 0.0], [0.5, 1.0]],
)
if result is not None:
    for point in result.points:
        print(point)
```

Splitting a quadrilateral:

```python
from gridglue.subdivision import simplex_subdivision

sub_elements, face_ids = simplex_subdivision(2, [[0, 0], [1, 0], [0, 1], [1, 1]])
# sub_elements == [[0, 1, 2], [1, 2, 3]]
# face_ids == [[2, 0, -1], [-1, 1, 3]]
```

## What it does not do

The package works on single pairs of elements. It does not take two whole
grids and build the merged grid of their intersections: there is no search
over element pairs, no neighbourhood computation between elements and no
container of merged intersections. It has no command-line tool and writes
no files.

## Running the tests

```
pytest
```