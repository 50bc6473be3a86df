from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Any
from datetime import datetime

@dataclass(frozen=True)
class Client:
    id: str
    fio: str
    company: Optional[str] = None
    phones: Tuple[str, ...] = ()
    inn: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'Client':
        return cls(
            id=row['id'],
            fio=row.get('fio') or '',
            company=row.get('company'),
            phones=tuple(row.get('phones') or ()),
            inn=row.get('inn'),
            created_at=row.get('created_at')
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "fio": self.fio,
            "company": self.company,
            "phones": list(self.phones),
            "inn": self.inn,
            "created_at": self.created_at.isoformat() if isinstance(self.created_at, datetime) else self.created_at
        }

@dataclass(frozen=True)
class Claim:
    id: str
    client_fio: str
    phone: str = ''
    car_number: str = ''
    client_id: Optional[str] = None
    client_company: Optional[str] = None
    phones: Tuple[str, ...] = ()
    vin: Optional[str] = None
    number: Optional[str] = None
    status: str = 'draft'

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'Claim':
        return cls(
            id=row['id'],
            client_fio=row.get('client_fio') or '',
            phone=row.get('phone') or '',
            car_number=row.get('car_number') or '',
            client_id=row.get('client_id'),
            client_company=row.get('client_company'),
            phones=tuple(row.get('phones') or ()),
            vin=row.get('vin'),
            number=row.get('number'),
            status=row.get('status') or 'draft'
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "number": self.number,
            "client_id": self.client_id,
            "client_fio": self.client_fio,
            "client_company": self.client_company,
            "phone": self.phone,
            "phones": list(self.phones),
            "car_number": self.car_number,
            "vin": self.vin,
            "status": self.status
        }

@dataclass(frozen=True)
class PhoneDuplicateGroup:
    phone: str
    clients: Tuple[Client, ...]

    def to_dict(self):
        return {"phone": self.phone, "clients": [c.to_dict() for c in self.clients]}

@dataclass(frozen=True)
class FioDuplicateGroup:
    normalized_fio: str
    clients: Tuple[Client, ...]

    def to_dict(self):
        return {"normalized_fio": self.normalized_fio, "clients": [c.to_dict() for c in self.clients]}

@dataclass(frozen=True)
class CarNumberClaim:
    claim: Claim
    client_fio: str

@dataclass(frozen=True)
class CarNumberDuplicateGroup:
    car_number: str
    claims: Tuple[CarNumberClaim, ...]

    def to_dict(self):
        return {
            "car_number": self.car_number,
            "claims": [
                {"claim": entry.claim.to_dict(), "client_fio": entry.client_fio}
                for entry in self.claims
            ]
        }

@dataclass(frozen=True)
class ValidationIssue:
    type: str           # 'phone', 'car_number', 'vin'
    entity_type: str    # 'client', 'claim'
    entity_id: str
    value: str
    message: str

    def to_dict(self):
        return {
            "type": self.type,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "value": self.value,
            "message": self.message
        }

@dataclass(frozen=True)
class QualityReport:
    phone_duplicates: Tuple[PhoneDuplicateGroup, ...] = ()
    fio_duplicates: Tuple[FioDuplicateGroup, ...] = ()
    car_number_duplicates: Tuple[CarNumberDuplicateGroup, ...] = ()
    validation_issues: Tuple[ValidationIssue, ...] = ()
    total_clients: int = 0
    total_claims: int = 0
    # Sections that could not be computed on this run
    errors: Tuple[str, ...] = ()

    def to_dict(self):
        return {
            "phone_duplicates": [g.to_dict() for g in self.phone_duplicates],
            "fio_duplicates": [g.to_dict() for g in self.fio_duplicates],
            "car_number_duplicates": [g.to_dict() for g in self.car_number_duplicates],
            "validation_issues": [i.to_dict() for i in self.validation_issues],
            "total_clients": self.total_clients,
            "total_claims": self.total_claims,
            "errors": list(self.errors)
        }

@dataclass(frozen=True)
class MergeResult:
    merged_count: int
    primary_client: Client

    def to_dict(self):
        return {"merged_count": self.merged_count, "primary_client": self.primary_client.to_dict()}
