"""
models/ - Data Transfer Objects
===============================
Immutable records exchanged between repositories, services and callers.
Construction fails with ValueError when a required field is missing.
"""
