"""
MovieIndex - title lookup over joined IMDb-style datasets.

Pipeline:
- Rating index (ratings TSV)
- Join/filter of the titles TSV against the rating index
- Ordering by title
- Exact-title lookup
"""

__version__ = "1.0.0"
