"""Answer-side collaborators of the scoring engine.

Write-time validation, standards compliance auto-fill, and group
configuration presets. All functions return new answer maps; inputs are
never mutated.
"""
