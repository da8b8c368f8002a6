# hpcwork

Classic parallel-computing workloads in plain Python, with no third-party
dependencies:

- **Odd-even transposition sort** of a binary file of 32-bit floats, with the
  data split into blocks across a number of simulated ranks
  (`hpcwork.oddeven`).
- **Mandelbrot set rendering** to an RGB PNG, with rows computed by a thread
  pool or dealt round-robin to simulated ranks (`hpcwork.mandelbrot`), on top
  of a small PNG writer and reader (`hpcwork.pngwriter`).
- **A single-process word count** that splits its sorted results evenly over
  several output files (`hpcwork.wordcount`).
- **MapReduce building blocks**: job configuration and messages
  (`hpcwork.jobconfig`), a thread-safe job log (`hpcwork.logger`), in-process
  message passing between nodes (`hpcwork.network`) and a job tracker that
  schedules map and reduce tasks (`hpcwork.job_tracker`).

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Command-line tools

### Odd-even sort

```
hpcwork-sort N INPUT OUTPUT [--ranks R]
```

Reads `N` 32-bit floats in the machine's native byte order from `INPUT`,
sorts them by block odd-even transposition over `R` simulated ranks (default:
the number of CPUs) and writes them to `OUTPUT` in the same format.

### Mandelbrot

```
hpcwork-mandelbrot OUT.png ITERS LEFT RIGHT LOWER UPPER WIDTH HEIGHT [--workers W] [--ranks R]
```

Renders the region from `LEFT` to `RIGHT` and `LOWER` to `UPPER` at
`WIDTH × HEIGHT` pixels, iterating each point at most `ITERS` times. Points
that never escape are black; others are coloured by their escape count.
By default rows are computed by `W` threads (default: the number of CPUs);
with `--ranks` they are dealt round-robin to `R` ranks and gathered back into
image order. The image is the same either way.

### Word count

```
hpcwork-wordcount JOB_NAME NUM_REDUCERS DELAY INPUT CHUNK_SIZE LOCALITY_FILE OUTPUT_DIR
```

Counts the words of `INPUT`, split on single spaces, and writes the counts in
sorted order as `word count` lines into `OUTPUT_DIR` + `JOB_NAME-<n>.out`,
with `n` counting from 1 and each file holding an equal share (rounded up) of
the distinct words. `DELAY`, `CHUNK_SIZE` and `LOCALITY_FILE` are accepted
but not used. `OUTPUT_DIR` is used as a plain prefix, so give it a trailing
separator (for example `out/`).

## Library use

```python
from hpcwork.oddeven import odd_even_sort
from hpcwork.mandelbrot import Region, render
from hpcwork.pngwriter import write_rgb_png

print(odd_even_sort([3.0, 1.0, 2.0], 2))

region = Region(iters=100, left=-2.0, right=1.0, lower=-1.0, upper=1.0, width=60, height=40)
write_rgb_png("set.png", region.width, region.height, render(region, workers=4))
```

Other pieces:

- `hpcwork.oddeven`: `partition`, `merge_low`, `merge_high`, `read_floats`,
  `write_floats`.
- `hpcwork.mandelbrot`: `escape_count`, `color`, `render_row`,
  `row_mapping`, `render_interleaved`.
- `hpcwork.pngwriter`: `write_rgb_png` and `read_rgb_png` for 8-bit,
  non-interlaced RGB images.
- `hpcwork.wordcount`: `word_count` and `write_outputs`.
- `hpcwork.jobconfig`: `Config` reads the locality file (`chunk_id node_id`
  per line, one mapper task per line) when it is created and gives the log,
  intermediate and output file names; `KV`, `KVs`, `MessageType` and
  `Message`.
- `hpcwork.logger`: `Logger` writes `millis,field,...` lines to standard
  output (with a level prefix) or to a file.
- `hpcwork.network`: `Network` delivers `Message` objects between numbered
  nodes, in order per sender.
- `hpcwork.job_tracker`: `JobTracker(config, network).run()` runs as node 0.
  It waits for map and reduce task requests from the other nodes, dispatches
  chunks preferring those stored on the asking node, logs every step to the
  job log, and returns once each other node has sent `TERMINATE`.

## What the package does not do

- It has no all-pairs shortest-path solver.
- It cannot run a distributed MapReduce job on its own: there are no task
  trackers, mapper or reducer tasks, and no command that starts a job. The
  `JobTracker` only schedules; something else must answer on the other nodes
  of the `Network`. For counting words, use `hpcwork-wordcount`.