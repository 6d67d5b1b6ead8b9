from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from protein_network_loader.sql.model.core.base import Base


class EnrichmentTerm(Base):
    __tablename__ = "enrichment_term"

    id = Column(Integer, primary_key=True, autoincrement=True)
    protein_id = Column(String, ForeignKey('protein.id'), nullable=False, index=True)
    category = Column(String, nullable=False)
    term = Column(String, nullable=False)
    description = Column(Text, nullable=True)

    protein = relationship("Protein", back_populates="enrichment_terms")

    def __repr__(self):
        return f"<EnrichmentTerm(protein_id={self.protein_id}, category={self.category}, term={self.term})>"
