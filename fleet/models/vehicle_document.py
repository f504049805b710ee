"""Vehicle paperwork (registration card, insurance, technical inspection) with expiry dates."""

import enum
from datetime import date

from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from fleet.database import Base


class DocumentType(str, enum.Enum):
    CARTE_GRISE = "carte_grise"
    ASSURANCE = "assurance"
    CONTROLE_TECHNIQUE = "controle_technique"


class VehicleDocument(Base):
    __tablename__ = "vehicle_documents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(50), nullable=False)
    expiration_date = Column(Date, nullable=False, index=True)
    file_path = Column(String(255))
    created_at = Column(DateTime)
    updated_at = Column(DateTime)

    vehicle = relationship("Vehicle", back_populates="documents")

    @property
    def is_expired(self) -> bool:
        return self.expiration_date < date.today()

    def __repr__(self):
        return f"<VehicleDocument {self.id} vehicle={self.vehicle_id} type={self.type}>"
