from sqlalchemy import Column, DateTime, String, Text, func
from sqlalchemy.orm import relationship
from protein_network_loader.sql.model.core.base import Base


class Protein(Base):
    __tablename__ = "protein"

    id = Column(String, primary_key=True)
    name = Column(String)
    alias = Column(String)
    size = Column(String, nullable=True)
    annotation = Column(Text, nullable=True)
    sequence = Column(Text, nullable=True)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    # Relaciones
    enrichment_terms = relationship("EnrichmentTerm", back_populates="protein")
    links = relationship("ProteinLink", foreign_keys="ProteinLink.source_id", back_populates="source")

    def __repr__(self):
        return f"<Protein(id={self.id}, name={self.name}, alias={self.alias})>"
