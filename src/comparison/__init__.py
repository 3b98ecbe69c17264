"""Assessment comparison.

Diffs two scoring results (baseline vs comparison) category by category,
group by group and item by item, with per-track deltas and direction.

Deterministic, no I/O.
"""
