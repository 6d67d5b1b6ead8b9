"""
Bulk import of STRING protein data into the relational store.

Usage:
  protein-network-loader [--config=<path>] [--jobs=<codes>]
  protein-network-loader (-h | --help)
  protein-network-loader --version

Options:
  -h --help           Show this screen.
  --version           Show version.
  -c --config=<path>  YAML configuration file [default: config/config.yaml].
  -j --jobs=<codes>   Comma separated job codes; prompts when omitted.
                      1 = Protein Info, 2 = Enrichment Terms, 3 = Protein Links.
"""

import sys
import traceback

from docopt import docopt

from protein_network_loader import __version__
from protein_network_loader.helpers.config.yaml import load_config
from protein_network_loader.helpers.exceptions import ImportConfigurationError
from protein_network_loader.helpers.logger.logger import setup_logger
from protein_network_loader.operation.extraction.enrichment_terms import EnrichmentTermImporter
from protein_network_loader.operation.extraction.protein_info import ProteinInfoImporter
from protein_network_loader.operation.extraction.protein_links import ProteinLinkImporter

JOBS = {
    '1': ('Protein Info', ProteinInfoImporter),
    '2': ('Enrichment Terms', EnrichmentTermImporter),
    '3': ('Protein Links', ProteinLinkImporter),
}


def parse_job_selection(answer):
    """
    Turns an answer such as ``"3, 1"`` into job codes in execution order.

    :raises ImportConfigurationError: On unknown codes or an empty selection.
    """
    choices = [choice.strip() for choice in answer.split(',') if choice.strip()]
    unknown = [choice for choice in choices if choice not in JOBS]
    if unknown:
        raise ImportConfigurationError(f"Unknown job code(s): {', '.join(unknown)}")
    if not choices:
        raise ImportConfigurationError("No job selected")
    return [code for code in JOBS if code in choices]


def prompt_job_selection(input_func=input):
    print("Choose which data to import:")
    for code, (title, _) in JOBS.items():
        print(f"{code}. {title}")
    print("Enter the numbers of the data you want to import (comma-separated):")
    return input_func("")


def run_jobs(conf, codes, store, logger):
    reports = []
    for code in codes:
        title, importer_class = JOBS[code]
        logger.info(f"Running job {code}: {title}")
        importer = importer_class(conf, store=store)
        for report in importer.start():
            logger.info(report.summary())
            reports.append(report)
    return reports


def main(argv=None):
    args = docopt(__doc__, argv=argv, version=__version__)
    logger = setup_logger("protein_network_loader")
    store = None
    try:
        conf = load_config(args['--config'])
        logger = setup_logger("protein_network_loader", conf['log_path'])
        codes = parse_job_selection(args['--jobs'] or prompt_job_selection())

        from protein_network_loader.sql.store import SQLAlchemyProteinStore
        store = SQLAlchemyProteinStore(conf)

        run_jobs(conf, codes, store, logger)
        logger.info("Data import completed successfully")
        return 0
    except Exception as e:
        logger.error(f"Error during import: {e}\n{traceback.format_exc()}")
        return 1
    finally:
        if store is not None:
            store.close()


if __name__ == '__main__':
    sys.exit(main())
