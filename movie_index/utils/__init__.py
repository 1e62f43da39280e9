"""
Utility modules for MovieIndex.

Cross-cutting concerns:
- TSV: Line reading, field splitting and partitioning
- Instrumentation: Per-stage timing and memory measurement
"""
