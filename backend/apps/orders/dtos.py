from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class PrescriptionDTO:
    id: str
    prescription_ref: str
    notes: str
    status: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class OrderDTO:
    id: str
    status: str
    delivery_address: str
    medicine_details: Dict[str, Any] = field(default_factory=dict)
    prescription_id: Optional[str] = None
    created_at: Optional[datetime] = None
