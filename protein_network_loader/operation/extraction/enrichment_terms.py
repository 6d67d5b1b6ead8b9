from protein_network_loader.helpers.parser.parser import parse_enrichment_term_line
from protein_network_loader.tasks.base import BaseImporter
from protein_network_loader.tasks.report import ImportReport


class EnrichmentTermImporter(BaseImporter):
    """
    Inserts one ``enrichment_term`` row per line of the enrichment terms file.

    Rows are not checked against the ``protein`` table and never deduplicated:
    importing the same file twice stores every term twice.
    """

    label = 'enrichment terms'
    progress_interval_key = 'term_progress_interval'
    default_progress_interval = 10000

    def start(self):
        self.logger.info("Importing enrichment terms...")
        report = ImportReport('enrichment terms', self.label)
        self.run_file(self.input_path('enrichment_terms_file'), report)
        self.logger.info(f"Finished importing {report.imported} enrichment terms")
        return [report]

    def process(self, line):
        parsed = parse_enrichment_term_line(line)
        if parsed is None:
            self.logger.debug(f"Skipping malformed enrichment term line: {line!r}")
            return None
        protein_id, category, term, description = parsed
        return {
            'protein_id': protein_id,
            'category': category,
            'term': term,
            'description': description,
        }

    def store_entry(self, records, report):
        self.store.insert_enrichment_terms(records)
        self.record_progress(report, len(records))
