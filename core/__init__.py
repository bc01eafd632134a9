"""
Shared kernel of the entitlement service.

Holds the domain event and exception base types, status value objects,
the unit of work port and the Django, cache, metrics and tracing
adapters every app builds on. ``core.container`` wires handlers.
"""
