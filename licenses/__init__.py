"""
Licenses app - single-use license keys.

Generation of unique keys, their codec and lifecycle
(unused, active, expired, revoked) and the license history audit trail.
"""
