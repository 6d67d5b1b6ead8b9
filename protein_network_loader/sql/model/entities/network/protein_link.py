from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from protein_network_loader.sql.model.core.base import Base


class ProteinLink(Base):
    """
    One directed half of an undirected interaction.

    Every edge of the source network is stored twice, (A, B) and (B, A), with
    the same combined score. The ordered pair is unique.
    """
    __tablename__ = "protein_link"
    __table_args__ = (
        UniqueConstraint('source_id', 'target_id', name='uq_protein_link_pair'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    source_id = Column(String, ForeignKey('protein.id'), nullable=False, index=True)
    target_id = Column(String, ForeignKey('protein.id'), nullable=False)
    combined_score = Column(Integer, nullable=False)

    source = relationship("Protein", foreign_keys=[source_id], back_populates="links")
    target = relationship("Protein", foreign_keys=[target_id])

    def __repr__(self):
        return f"<ProteinLink(source_id={self.source_id}, target_id={self.target_id}, " \
               f"combined_score={self.combined_score})>"
