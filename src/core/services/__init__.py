"""Derivation pipeline services.

Stages run in this order: key derivation, byte-to-charset mapping, requirement
enforcement. `derivation_service` wires them together.
"""
