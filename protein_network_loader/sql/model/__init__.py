from protein_network_loader.sql.model.core.base import Base
from protein_network_loader.sql.model.entities.protein.protein import Protein
from protein_network_loader.sql.model.entities.enrichment.enrichment_term import EnrichmentTerm
from protein_network_loader.sql.model.entities.network.protein_link import ProteinLink

__all__ = [
    "Base",
    "Protein",
    "EnrichmentTerm",
    "ProteinLink",
]
