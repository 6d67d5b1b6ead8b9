from protein_network_loader.operation.extraction.aliases import AliasResolver
from protein_network_loader.operation.extraction.protein_info import ProteinInfoImporter, ProteinInfoPass
from protein_network_loader.operation.extraction.enrichment_terms import EnrichmentTermImporter
from protein_network_loader.operation.extraction.protein_links import ProteinLinkImporter
from protein_network_loader.helpers.config.yaml import read_yaml_config, load_config

__version__ = "0.1.0"

__all__ = [
    "AliasResolver",
    "ProteinInfoImporter",
    "ProteinInfoPass",
    "EnrichmentTermImporter",
    "ProteinLinkImporter",
    "read_yaml_config",
    "load_config",
]
