"""Infrastructure Layer — IO adapters (Hub HTTP, Gradio MCP, logging).

Invariants:
    - Every transport failure is mapped to a DynamicSpaceError subclass (core/errors.py)
    - No adapter retries; a failure surfaces on the first attempt

Design Decisions:
    - Adapters are thin: formatting and coercion stay in core/
"""
