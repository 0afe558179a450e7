from enum import Enum
from typing import Optional

from pydantic import BaseModel


class AddressState(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    ACTIVE_RESERVATION = "ActiveReservation"
    INACTIVE_RESERVATION = "InactiveReservation"
    DECLINED = "Declined"
    DECLINED_RESERVATION = "DeclinedReservation"
    EXPIRED = "Expired"
    OFFERED = "Offered"
    UNKNOWN = "Unknown"


class Scope(BaseModel):
    scope_id: str
    name: Optional[str] = None
    state: Optional[str] = None


class Reservation(BaseModel):
    name: Optional[str] = None
    ip_address: str
    scope_id: str
    client_id: str  # MAC в виде aa-bb-cc-dd-ee-ff, как его отдаёт сервер
    address_state: str = AddressState.UNKNOWN.value  # текст как есть, новые значения не теряем
    description: Optional[str] = None
    type: Optional[str] = None

    @property
    def state(self) -> Optional[AddressState]:
        try:
            return AddressState(self.address_state)
        except ValueError:
            return None

    @property
    def lease_state(self) -> str:
        return self.address_state
