# cliffordscope

cliffordscope samples Clifford strange attractors and renders them as greyscale density images.

A Clifford attractor is the orbit of the map

    x' = sin(a·y) + c·cos(a·x)
    y' = sin(b·x) + d·cos(b·y)

for four parameters `a`, `b`, `c` and `d`. The defaults are `-1.4, 1.6, 1.0, 0.7`. Each time the
orbit lands in a cell of the density map, that cell's count goes up by one. The counts are divided by
the largest count and passed through a scaling curve to give the final image. The curve can be
linear, logarithmic, power, sigmoid or square root.

## Installation

    pip install .

To install the test dependencies as well:

    pip install ".[test]"

## Command line

    cliffordscope -o attractor.png

The command does the following, in order:

1. It builds a `Manager` with a pool of worker threads.
2. It lets the workers sample for a set time.
3. It merges their density maps, scales the result and writes it as an RGB image.
4. It prints the output path, the size and the parameters it used.

Options:

- `-o`, `--output`: the image file to write. The default is `attractor.png`. The format follows
  the file extension.
- `--width`, `--height`: the image size. The defaults are 1920 and 1080. The attractor fills 95% of
  each side and is centred in the image.
- `--seconds`: how long the workers run. The default is 1/60 s.
- `--workers`: the number of worker threads. The default is 8 and the minimum is 1.
- `--seed`: a seed for reproducible random numbers.
- `--params A B C D`: explicit map parameters.
- `--randomize`: draws random parameters in [-2, 2) until a warm-up run covers at least 1% of the
  map. This is applied after `--params`.
- `--scaling`: one of `linear`, `log`, `power`, `sigmoid` or `sqrt`. The default is `power`.
- `--power-exponent`: the exponent for `power` scaling. The default is 0.5.
- `--sigmoid-midpoint`: the midpoint for `sigmoid` scaling. The default is 0.5.
- `--sigmoid-steepness`: the steepness for `sigmoid` scaling. The default is 3.0.

## Library

```python
from cliffordscope.cli import render_image
from cliffordscope.manager import Manager, ScalingMethod
from cliffordscope.utils import make_rng

with Manager(640, 360, compute_count=4, rng=make_rng(1)) as manager:
    manager.scaling_method = ScalingMethod.LOG
    manager.init_compute()
    manager.propagate_attractor()
    manager.compute_iterate_until_timeout(0.5)
    manager.blit_attractor_to_texture()

render_image(manager).save("out.png")
```

### `cliffordscope.attractor`

`Attractor(width, height, type=AttractorType.CLIFFORD, rng=None)` holds two things:

- `parameters`, the list of map parameters.
- `density_map`, a `uint32` array of shape `(height, width)`.

It has these methods:

- `iterate(n)` runs the map `n` steps from a random starting point.
- `iterate_until_timeout(seconds)` iterates in batches of 10,000 steps until the time is up.
- `clean()` zeroes the map.
- `reset()` zeroes the map and restores the default parameters.
- `randomize()` resets the attractor and then draws new parameters.
- `randomize_until_chaotic()` repeats `randomize()` until a run of 25,000 steps visits at least 1%
  of the cells.
- `occupancy()` returns the fraction of cells that have been visited.

Two functions are available on their own:

- `iterate_clifford(attractor, n, x, y)` runs the map from a given point and returns the last point
  it reached.
- `randomize_clifford(attractor)` sets the parameters to random values.

`AttractorSettings` describes each `AttractorType`.

### `cliffordscope.compute`

`Compute(attractor)` iterates one attractor on a daemon thread. It starts in the `PAUSED` state.

- `resume()` and `pause()` switch between the `RUNNING` and `PAUSED` states.
- `tick()` runs one batch.
- `destroy()` stops the thread and waits for it to end.
- `clean_attractor()` and `reset_attractor()` act on the attractor while holding the worker's lock.

`ComputeState` lists the states. `Compute` is also a context manager that destroys itself on exit.

### `cliffordscope.manager`

`Manager(width, height, compute_count=8, rng=None)` owns the main attractor, the workers and two
textures of shape `(height, width, 4)`:

- `texture_data` holds the raw counts.
- `texture_data_gl` holds floats in [0, 1].

Worker methods:

- `init_compute()` starts paused workers. Each worker gets its own attractor and a random generator
  derived from the manager's `rng`.
- `resume_compute()` and `pause_compute()` start and stop all workers.
- `compute_iterate_until_timeout(seconds)` resumes the workers, waits for the given time, then
  pauses them again.
- `destroy_compute()` stops all workers. Leaving the `with` block does the same.

Attractor methods:

- `propagate_attractor()` copies the main parameters to every worker.
- `clean_attractor()` zeroes the maps of the main attractor and every worker.
- `reset_attractor()` restores the default parameters everywhere.

Texture methods:

- `blit_attractor_to_texture()` runs the steps below in order and returns `texture_data_gl`:
  - `clean_texture()`
  - `merge_attractors_data()`
  - `copy_attractor_to_texture()`
  - `normalize_texture()`
- `merge_attractors_data()` adds each worker's map into the main map. Each call adds the workers'
  current counts again. Call `clean_attractor()` between blits if you need fresh totals.

`tick_timer(now=None)` advances a frame clock and sets `delta_time` and `frame_count`.

Other names in this module:

- `ScalingMethod` selects the curve that `normalize_texture()` applies.
- `ToneMappingMode` lists the tone-mapping choices.
- `sigmoid_normalize(x, midpoint, steepness)` works on scalars and on arrays. The sigmoid curve maps
  its midpoint to one half:

      >>> from cliffordscope.manager import sigmoid_normalize
      >>> sigmoid_normalize(0.5, 0.5, 3.0)
      0.5

### `cliffordscope.cli`

- `render_image(manager)` converts `texture_data_gl` into an 8-bit RGB Pillow image with the top
  row first.
- `main(argv=None)` runs the command.

### `cliffordscope.fps`

`FpsCounter(size=512)` is a ring buffer of frame-rate samples. It has these methods:

- `add_sample`
- `sample_count`
- `max_fps`
- `average_fps`
- `max_fps_with_sample_limit(n)`, `average_fps_with_sample_limit(n)` and
  `buffer_with_sample_limit(n)`, which use only the most recent `n` samples.
- `index_buffer()`, which returns x coordinates for plotting.

### `cliffordscope.shader_includes`

`load_shader_source(path)` reads a text file. Every line that contains `#include ` is replaced by the
contents of the file named after it. That path is relative to the directory of the including file,
and included files are expanded recursively.

The expanded text is also written to `<path>.final`. A missing file raises `FileNotFoundError`, and
an include cycle raises `ValueError`.

`file_directory(path)` returns the directory part of `path`, keeping its trailing separator.

### `cliffordscope.utils`

- `make_rng(seed=None)` returns a random generator.
- `random_float(rng)` returns a uniform float in [0, 1) built from 32 random bits.
- `Direction` and `RGB` are small helper types.
- The module also defines the default window size, `WINDOW_WIDTH` and `WINDOW_HEIGHT`.

## What it does not do

- There is no interactive window, on-screen controls or live preview. Images are rendered off-line
  to a file.
- The post-processing settings on `Manager` are stored but not used by `render_image`. These are
  `tone_mapping_mode`, `exposure`, `gamma`, `brightness` and `contrast`. The image only reflects the
  selected scaling curve.

## Tests

    pytest