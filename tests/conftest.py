import logging
import os

import pytest

from protein_network_loader.helpers.config.yaml import DEFAULTS
from protein_network_loader.sql.store import SQLAlchemyProteinStore

DATA_DIR = os.path.join(os.path.dirname(__file__), 'data')


@pytest.fixture
def conf(tmp_path):
    config = dict(DEFAULTS)
    config.update({
        'DB_URI': f"sqlite:///{tmp_path / 'string_network.db'}",
        'data_dir': str(tmp_path),
        'protein_info_file': 'protein.info.txt',
        'protein_alias_file': 'protein.aliases.txt',
        'protein_sequences_file': 'protein.sequences.fa',
        'enrichment_terms_file': 'protein.enrichment.terms.txt',
        'protein_links_file': 'protein.links.full.txt',
        'batch_size': 2,
    })
    return config


@pytest.fixture
def sample_conf(conf):
    """Configuration pointing at the bundled STRING excerpts under tests/data."""
    sample = dict(conf)
    sample['data_dir'] = DATA_DIR
    return sample


@pytest.fixture
def store(conf):
    sql_store = SQLAlchemyProteinStore(conf)
    yield sql_store
    sql_store.close()


@pytest.fixture
def importer_messages(caplog):
    """
    Collects INFO messages of a named logger.

    Importer loggers do not propagate, so the capture handler is attached to
    the logger itself.
    """
    attached = []

    def capture(name):
        logger = logging.getLogger(name)
        logger.addHandler(caplog.handler)
        attached.append(logger)
        return lambda: [record.getMessage() for record in caplog.records
                        if record.name == name and record.levelno == logging.INFO]

    caplog.set_level(logging.INFO)
    yield capture
    for logger in attached:
        logger.removeHandler(caplog.handler)
