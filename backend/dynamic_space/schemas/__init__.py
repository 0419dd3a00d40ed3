"""Schemas — Pydantic models for the tool-call boundary.

Invariants:
    - Schemas contain validation only, no IO
"""
