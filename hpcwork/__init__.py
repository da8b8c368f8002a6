"""Parallel computing workloads: odd-even sort, Mandelbrot rendering, word count and MapReduce scheduling."""

__version__ = "0.1.0"