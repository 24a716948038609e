"""
MenuRelay Backend — Application Package Initializer
====================================================

What: Marks the `menurelay` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend is a thin relay in front of two Google Cloud services:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Relay Logic)      │  ← Validation, normalization
    ├─────────────────────────────────────┤
    │     Vision / Storage Adapters       │  ← Google Cloud SDK clients
    └─────────────────────────────────────┘

    Routes map HTTP to service calls; services validate input and call the
    adapters; adapters wrap SDK failures in application exceptions.
"""

__version__ = "1.0.0"
