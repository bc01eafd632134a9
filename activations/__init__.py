"""
Activations module - Tenant license assignments.

This module handles:
- TenantLicenseAssignment entity (one active per tenant)
- License key activation (claim, supersede, reactivate)
"""
