"""Snapshot assembly and persistence.

`build_snapshot` runs the aggregators over one fetched record set,
`write_snapshot` persists the five JSON artifacts as a unit, and
`refresh_snapshot` ties fetch, build and write together for callers.
"""
