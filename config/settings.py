"""
Configuration settings for MovieIndex.

Centralized configuration for the ingestion, ordering and lookup stages.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = PROJECT_ROOT / "data"

# Input datasets (IMDb-style TSV dumps)
RATINGS_PATH = Path(os.getenv("MOVIE_INDEX_RATINGS", str(DATA_ROOT / "title.ratings.tsv")))
TITLES_PATH = Path(os.getenv("MOVIE_INDEX_TITLES", str(DATA_ROOT / "title.basics.tsv")))

# Header policy, shared by both files.
# False: every line is data (an IMDb header row fails the row filters anyway)
INPUT_HAS_HEADER = False

# Row filters
MOVIE_CATEGORY = "movie"
MIN_TITLE_FIELDS = 9
MIN_RATING_FIELDS = 3

# Join pipeline
INGEST_WORKERS = int(os.getenv("MOVIE_INDEX_WORKERS", "16"))
JOIN_QUEUE_MAXSIZE = 10000  # Bounded hand-off between workers and the consumer

# Ordering engine ("quicksort" or "heapsort")
SORT_ALGORITHM = os.getenv("MOVIE_INDEX_SORT", "quicksort")

# Lookup engine
SEARCH_PARTITIONS = 4
USE_CONCURRENT_SEARCH = False

# Instrumentation
TRACK_MEMORY = False  # tracemalloc slows ingestion noticeably

# Logging
LOG_LEVEL = os.getenv("MOVIE_INDEX_LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "movie_index.log"


# Design Rationale and Trade-offs:
#
# 1. Environment overrides only for paths, worker count and sort algorithm
#    - These are the values that change between machines and datasets
#    - Row filter constants describe the file format and stay fixed
#
# 2. Bounded join queue
#    - Workers block when the consumer falls behind
#    - Trade-off: Producers may stall briefly, but memory stays flat
