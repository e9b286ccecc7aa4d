from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

class Customer(BaseModel):
    model_config = ConfigDict(extra="allow")
    email: Optional[str] = None

class PaymentEvent(BaseModel):
    """Événement SnapScan (forme définie par le prestataire, champs inconnus conservés)."""
    model_config = ConfigDict(extra="allow")

    status: Optional[str] = None
    amount: float = 0
    customer: Optional[Customer] = None
    metadata: Dict[str, Any] = {}

    @field_validator("amount", mode="before")
    def coerce_amount(cls, v: Any) -> float:
        try:
            return float(v)
        except (TypeError, ValueError):
            return 0.0

    @field_validator("customer", mode="before")
    def coerce_customer(cls, v: Any) -> Any:
        return v if isinstance(v, dict) else None

    @field_validator("metadata", mode="before")
    def coerce_metadata(cls, v: Any) -> Dict[str, Any]:
        return v if isinstance(v, dict) else {}

    @property
    def is_paid(self) -> bool:
        return self.status == "paid"

    @property
    def payer_email(self) -> Optional[str]:
        if self.customer and self.customer.email:
            return self.customer.email
        return self.metadata.get("email")

    @property
    def amount_major(self) -> str:
        """Montant en unités principales, 2 décimales (ex: 10000 -> "100.00")."""
        return f"{self.amount / 100:.2f}"
