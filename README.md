# cubcaster

cubcaster opens a scene that a `.cub` file describes and shows it as a
first-person 3D maze. It casts one ray per screen column across a grid map. It
draws textured walls, a flat floor and a flat ceiling in a 1920×1080 pygame
window that you can resize.

## Installation

```
pip install .
```

To install the test suite as well:

```
pip install ".[test]"
pytest
```

## Running

```
cubcaster path/to/scene.cub
```

The program takes exactly one argument, which must be a readable file whose
name ends in `.cub`. If the arguments, the scene or a texture are not valid, the
program writes `Error` to standard error and exits with status 1.

### Controls

| Key           | Action               |
|---------------|----------------------|
| `W` / `S`     | move forward / back  |
| `A` / `D`     | strafe left / right  |
| `←` / `→`     | turn left / right    |
| `Esc`         | quit                 |

Closing the window also quits. The game keeps the player a small distance away
from walls. If a step is blocked, nothing happens in that tick, and a turn
pressed in the same tick is dropped too.

## The `.cub` format

A scene file lists six elements in a fixed order, followed by the map. The
elements may be separated by blank lines.

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png
F 220,100,0
C 225,30,0

        1111111111111
        1000000000001
        1000N00000001
        1111111111111
```

- The elements must appear in exactly this order: north, south, west, east,
  floor, ceiling. Each identifier is followed by a space. The value after it is
  a single word with no spaces inside it.
- `NO`/`N`, `SO`/`S`, `WE`/`W` and `EA`/`E` name the wall textures. Each one
  must be an existing, readable `.png` file.
- `F` and `C` give the floor and ceiling colours as three comma-separated
  components. Each component is an unsigned decimal number, and leading
  whitespace is allowed. A component may be at most 2147483647, and its value
  is taken modulo 256.
- The map starts at the first line that is not an element. Blank lines inside
  the map are skipped.
- In the map, `1` is a wall and `0` is open floor. Exactly one of `N`, `S`,
  `E` or `W` marks the player's start cell and the direction the player faces.
  Every open cell must be enclosed by walls. An open cell must not lie on the
  first row, the last row or the first column. It must not be able to reach a
  space or the end of a row.

## Using it as a library

```python
from cubcaster.cubfile import load_scene, CubFileError
from cubcaster.raycaster import RayCaster

scene = load_scene("maps/small.cub")
caster = RayCaster(scene.rows, 320, 200, 64, 60.0)
rays = caster.cast()
```

- `cubcaster.cubfile` reads and validates scene files. `load_scene` and
  `parse_scene` return a `Scene` that holds the map rows, the four texture
  paths and the floor and ceiling colours as RGBA integers. They raise
  `CubFileError` when a file is not valid. `cub_name_is_valid` checks a
  command-line argument list.
- `cubcaster.elements` classifies and checks the texture and colour lines.
  `cubcaster.mapcheck` checks and measures the map grid.
- `cubcaster.geometry` holds the angle and grid helpers. Angles are in
  degrees, counter-clockwise from east, and pixel y grows downward.
- `cubcaster.raycaster` finds the wall hits. `RayCaster.cast` returns one
  `Ray` per column, with its distance, projected slice height and top row.
- `cubcaster.movement` handles rotation (`rotate`) and movement with
  collision checks (`try_move`, `can_stand`, `Move`).
- `cubcaster.renderer` loads textures (`load_texture`, `load_wall_textures`).
  Its `draw_frame` fills a `(height, width)` `uint32` numpy frame from a list
  of rays.
- `cubcaster.app` provides the `Game` class, the `run` window loop and the
  `main` entry point.