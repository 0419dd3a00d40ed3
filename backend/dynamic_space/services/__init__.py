"""Services Layer — operation router, operation handlers, and their collaborators.

Invariants:
    - One collaborator module per remote concern (search, discovery, parameters, invocation)
    - Tool dispatch uses an explicit dict mapping (no auto-discovery)
"""
