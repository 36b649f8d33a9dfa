"""
Repairs API — Application Package Initializer
==============================================

What: Marks the `repairs_api` directory as a Python package.
Who:  Used by uvicorn (`uvicorn repairs_api.main:app`), pytest and the
      `repairs-api` console script.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services + Validation (Handlers)  │  ← filter / merge rules
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← pydantic records and contracts
    ├─────────────────────────────────────┤
    │          Store (In-Memory)          │  ← the only shared mutable state
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
