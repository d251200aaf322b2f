"""Interfaces of the core.

Why:
- Defines the structural contracts (Protocol) concrete backends implement.
- The derivation service depends on the abstraction, so tests can inject a
  failing or instrumented key deriver.
"""
