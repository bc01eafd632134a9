"""
Activation DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime


@dataclass
class ActivationResultDTO:
    """DTO for activation response."""

    tenant_id: uuid.UUID
    license_key: str
    duration_days: int
    activated_at: datetime
    expires_at: datetime
    message: str
