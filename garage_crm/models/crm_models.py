from sqlalchemy import Column, String, JSON, DateTime, Integer, ForeignKey
from sqlalchemy.orm import declarative_base
from datetime import datetime

Base = declarative_base()

class ClientModel(Base):
    __tablename__ = 'clients'

    id = Column(String, primary_key=True)
    fio = Column(String, nullable=False)
    company = Column(String)
    phones = Column(JSON, default=list)
    inn = Column(String)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "fio": self.fio,
            "company": self.company,
            "phones": list(self.phones or []),
            "inn": self.inn,
            "created_at": self.created_at,
            "updated_at": self.updated_at
        }

class ClaimModel(Base):
    __tablename__ = 'claims'

    id = Column(String, primary_key=True)
    number = Column(String)
    # Filled in for claims created from the dictionary or reassigned by a merge
    client_id = Column(String, ForeignKey('clients.id'), nullable=True)
    # Snapshot of the client at creation time, not a live reference
    client_fio = Column(String, nullable=False, default="")
    client_company = Column(String)
    phone = Column(String, default="")
    phones = Column(JSON, default=list)
    car_number = Column(String, default="")
    car_brand = Column(String, default="")
    vin = Column(String)
    mileage = Column(Integer, default=0)
    status = Column(String, default="draft")  # 'draft', 'agreed', 'in_progress', 'completed'
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "number": self.number,
            "client_id": self.client_id,
            "client_fio": self.client_fio,
            "client_company": self.client_company,
            "phone": self.phone,
            "phones": list(self.phones or []),
            "car_number": self.car_number,
            "car_brand": self.car_brand,
            "vin": self.vin,
            "mileage": self.mileage,
            "status": self.status,
            "created_at": self.created_at,
            "updated_at": self.updated_at
        }
