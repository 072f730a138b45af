"""Snapshot aggregation helpers.

This package converts validated dissertation summaries into the analytical
datasets read by the explorer (yearly timeline, school ranking and
concentration, summary statistics, per-school time series). Every function is
a pure computation over the frame it is given; nothing is cached between runs.
"""
