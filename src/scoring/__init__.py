"""Trustworthiness scoring and capping engine.

Turns a framework definition and a flat answer set into weighted, capped
scores for every item, group, category and the overall assessment, on the
operational and design tracks independently.

Deterministic -- no I/O, no shared state.
"""
