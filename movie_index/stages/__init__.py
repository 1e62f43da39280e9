"""
Pipeline stages for MovieIndex.

Each stage consumes the previous stage's output:
- Rating Index Builder
- Record Join/Filter Pipeline
- Ordering Engine
- Lookup Engine
"""
