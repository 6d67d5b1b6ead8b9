from protein_network_loader.helpers.parser.parser import LINKS_HEADER_TOKEN, parse_link_line
from protein_network_loader.tasks.base import BaseImporter
from protein_network_loader.tasks.report import ImportReport


def symmetric_links(edges):
    """
    Expands undirected edges into both directed orientations.

    :param edges: Iterable of ``(protein_a, protein_b, combined_score)``.
    :return: List of ``(source, target, combined_score)`` rows, two per edge.
    """
    rows = []
    for protein_a, protein_b, combined_score in edges:
        rows.append((protein_a, protein_b, combined_score))
        rows.append((protein_b, protein_a, combined_score))
    return rows


class ProteinLinkImporter(BaseImporter):
    """
    Loads the STRING interaction network into ``protein_link``.

    The links file has no ``#`` comments; its only non-data line is the header,
    recognised by the leading ``protein1`` column name. Each edge is stored as
    two directed rows carrying the same combined score, and rows whose ordered
    pair already exists are left alone, so importing a file again adds nothing.
    """

    label = 'protein links'
    progress_interval_key = 'link_progress_interval'
    default_progress_interval = 10000

    def start(self):
        self.logger.info("Importing protein links...")
        report = ImportReport('protein links', self.label)
        self.run_file(self.input_path('protein_links_file'), report, comment_prefix=LINKS_HEADER_TOKEN)
        self.logger.info(f"Finished importing {report.imported} protein links")
        return [report]

    def process(self, line):
        edge = parse_link_line(line)
        if edge is None:
            self.logger.debug(f"Skipping malformed link line: {line!r}")
        return edge

    def store_entry(self, records, report):
        self.store.insert_protein_links(symmetric_links(records))
        self.record_progress(report, len(records))
