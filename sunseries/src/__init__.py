"""
Irradiance series package for the recycle-site PCS telemetry.

Fetches solar-irradiance documents from Elasticsearch one calendar day at a
time, caches each day as a JSON file, reconstructs a gap-free per-second
series for a requested window, and compares it against a closed-form
clear-sky irradiance model.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""
