"""
Tenants module - Tenant entitlement state.

This module handles:
- Tenant entity (trial window, entitlement status)
- Access evaluation (trial, licensed, grace period, suspended)
- Suspension and reactivation
"""
