"""
Task & Budget Planner - Core Package

Tracks tasks, expenses, income and monthly income goals in a single
JSON data blob.

DESIGN PRINCIPLES:
1. The repository is the only writer; readers get immutable snapshots
2. Every mutation is written through before it returns
3. Unknown ids are reported, never raised
4. Storage failures degrade to in-memory operation
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Task & Budget Planner Team"
