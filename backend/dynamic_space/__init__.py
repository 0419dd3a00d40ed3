"""Dynamic Space Gateway — single `dynamic_space` tool over Gradio MCP Spaces.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
