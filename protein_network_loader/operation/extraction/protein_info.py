from enum import Enum

from protein_network_loader.helpers.exceptions import ImportConfigurationError, StoreError
from protein_network_loader.helpers.parser.fasta import iter_fasta_records
from protein_network_loader.helpers.parser.parser import open_text, parse_protein_info_line
from protein_network_loader.operation.extraction.aliases import AliasResolver
from protein_network_loader.tasks.base import BaseImporter
from protein_network_loader.tasks.report import ImportReport

UNKNOWN_PROTEIN_NAME = "Unknown protein {identifier}"


class ProteinInfoPass(Enum):
    METADATA = 'metadata'
    SEQUENCES = 'sequences'
    ALL = 'all'


class ProteinInfoImporter(BaseImporter):
    """
    Loads protein metadata and sequences into the ``protein`` table.

    The job runs in two passes over two files:

    - **Metadata**: every line of the protein info file is merged with its
      resolved alias and upserted. The upsert always clears ``sequence``.
    - **Sequences**: the FASTA file is streamed and each record's sequence is
      written onto the existing protein. Identifiers that only appear in the
      FASTA file get a placeholder row named ``Unknown protein <id>``.

    Because the metadata pass clears sequences, it has to run before the
    sequence pass. Running the sequence pass on its own is refused unless the
    caller accepts that stored sequences may not match the stored metadata.

    Store failures during the sequence pass are isolated per record: the
    failing record is logged and counted as a mismatch, and the pass carries
    on. Failures during the metadata pass abort the job.

    :param conf: Configuration dictionary.
    :type conf: dict
    :param store: Store to write to; built from ``conf`` when omitted.
    :param alias_resolver: Pre-built :class:`AliasResolver`; read from
        ``protein_alias_file`` when omitted.
    """

    label = 'proteins'
    progress_interval_key = 'protein_progress_interval'

    def __init__(self, conf, store=None, alias_resolver=None):
        super().__init__(conf, store)
        self.alias_resolver = alias_resolver

    def start(self, passes=ProteinInfoPass.ALL, allow_stale_sequences=False):
        passes = ProteinInfoPass(passes)
        if passes is ProteinInfoPass.SEQUENCES and not allow_stale_sequences:
            raise ImportConfigurationError(
                "The sequence pass must follow the metadata pass; "
                "pass allow_stale_sequences=True to run it on its own")

        reports = []
        if passes in (ProteinInfoPass.METADATA, ProteinInfoPass.ALL):
            if self.alias_resolver is None:
                self.alias_resolver = AliasResolver.from_file(self.input_path('protein_alias_file'), self.logger)
            reports.append(self.import_metadata(self.input_path('protein_info_file')))
        if passes in (ProteinInfoPass.SEQUENCES, ProteinInfoPass.ALL):
            reports.append(self.import_sequences(self.input_path('protein_sequences_file')))
        return reports

    def import_metadata(self, path):
        self.logger.info("Importing protein info...")
        report = ImportReport('protein info', 'proteins')
        self.run_file(path, report)
        self.logger.info(f"Finished importing {report.imported} proteins")
        return report

    def process(self, line):
        parsed = parse_protein_info_line(line)
        if parsed is None:
            self.logger.debug(f"Skipping malformed protein info line: {line!r}")
            return None

        identifier, preferred_name, size, annotation = parsed
        alias = self.alias_resolver.resolve(identifier) or preferred_name
        fields = {
            'name': preferred_name,
            'alias': alias,
            'size': size,
            'annotation': annotation,
            'sequence': None,
        }
        return identifier, fields, None

    def store_entry(self, records, report):
        self.store.upsert_proteins(records)
        self.record_progress(report, len(records))

    def import_sequences(self, path):
        self.logger.info("Importing FASTA sequences...")
        report = ImportReport('FASTA sequences', 'FASTA sequences')
        self.logger.info(f"Reading {path}")
        with open_text(path) as handle:
            records = (self.sequence_entry(identifier, sequence)
                       for identifier, sequence in iter_fasta_records(handle))
            self.drain(records, self.store_sequences, report)
        self.logger.info(f"Finished importing {report.imported} FASTA sequences")
        self.logger.info(f"Encountered {report.mismatched} mismatches")
        return report

    @staticmethod
    def sequence_entry(identifier, sequence):
        placeholder = UNKNOWN_PROTEIN_NAME.format(identifier=identifier)
        return identifier, {'sequence': sequence}, {'name': placeholder, 'alias': placeholder}

    def store_sequences(self, records, report):
        try:
            self.store.upsert_proteins(records)
        except StoreError as e:
            self.logger.warning(f"Batch of {len(records)} sequences failed, retrying one by one: {e}")
        else:
            self.record_progress(report, len(records))
            return

        for identifier, fields, create_defaults in records:
            try:
                self.store.upsert_protein(identifier, fields, create_defaults)
            except StoreError as e:
                self.logger.error(f"Error processing protein {identifier}: {e}")
                report.mismatched += 1
            else:
                self.record_progress(report, 1)
