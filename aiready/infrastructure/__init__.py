"""Infrastructure Package

Cross-cutting infrastructure for the aiready service; currently the
structured logging layer in ``aiready.infrastructure.logging``.
"""
