"""
Base Importer
=============

Every import job follows the same shape: open a flat file, stream it line by
line, turn each line into a record, and write the records to the store in
batches. :class:`BaseImporter` owns that loop together with logging,
progress reporting and store initialization, so concrete jobs only describe
how a line becomes a record and how a batch of records is written.

**Customization**

Subclass :class:`BaseImporter` and implement ``start``, ``process`` and
``store_entry``. ``process`` returns None for lines that must be skipped;
those lines are counted in the job report.

.. code-block:: python

   from protein_network_loader.tasks.base import BaseImporter
   from protein_network_loader.tasks.report import ImportReport

   class MyImporter(BaseImporter):
       label = 'rows'

       def start(self):
           report = ImportReport('my rows', self.label)
           self.run_file(self.input_path('my_file'), report)
           return [report]

       def process(self, line):
           fields = line.split('\\t')
           return fields if len(fields) == 2 else None

       def store_entry(self, records, report):
           ...
           self.record_progress(report, len(records))
"""

import os
from abc import ABC, abstractmethod

from protein_network_loader.helpers.logger.logger import setup_logger
from protein_network_loader.helpers.parser.parser import COMMENT_PREFIX, iter_data_lines, open_text


class BaseImporter(ABC):
    """
    Foundation for the batch import jobs.

    Attributes:
        conf (dict): Configuration dictionary loaded from YAML.
        logger (Logger): Logger named after the concrete importer class.
        store (ProteinStore): Write target shared with the caller.
        batch_size (int): Number of records buffered before a write.
        progress_interval (int): Progress line cadence, in records.
    """

    label = 'records'
    progress_interval_key = None
    default_progress_interval = 1000

    def __init__(self, conf, store=None):
        self.logger = setup_logger(self.__class__.__name__, conf.get('log_path'))
        self.logger.info(f"Initializing {self.__class__.__name__}")
        self.conf = conf
        self.batch_size = conf.get('batch_size', 1000)
        self.progress_interval = conf.get(self.progress_interval_key, self.default_progress_interval)
        self.store = store if store is not None else self.store_init()

    def store_init(self):
        """
        Build the default SQLAlchemy store from the configuration.

        Only used when no store is injected; the CLI shares one store across jobs.
        """
        from protein_network_loader.sql.store import SQLAlchemyProteinStore

        self.logger.info("Initializing SQLAlchemy store")
        return SQLAlchemyProteinStore(self.conf)

    def input_path(self, key):
        return os.path.join(self.conf.get('data_dir') or '', self.conf[key])

    def run_file(self, path, report, comment_prefix=COMMENT_PREFIX):
        """
        Stream ``path`` through ``process`` and write the records with ``store_entry``.

        :param path: Input file, optionally gzip-compressed.
        :param report: :class:`ImportReport` updated in place.
        :param comment_prefix: Lines starting with this prefix are ignored and not counted.
        """
        self.logger.info(f"Reading {path}")
        with open_text(path) as handle:
            records = (self.process(line) for line in iter_data_lines(handle, comment_prefix))
            self.drain(records, self.store_entry, report)

    def drain(self, records, writer, report):
        """
        Buffer ``records`` and hand them to ``writer`` every ``batch_size`` records.

        None entries are counted as skipped.
        """
        batch = []
        for record in records:
            if record is None:
                report.skipped += 1
                continue
            batch.append(record)
            if len(batch) >= self.batch_size:
                writer(batch, report)
                batch = []
        if batch:
            writer(batch, report)

    def record_progress(self, report, count):
        previous = report.imported
        report.imported += count
        if report.imported // self.progress_interval > previous // self.progress_interval:
            self.logger.info(f"Imported {report.imported} {report.label}")

    @abstractmethod
    def start(self):
        """
        Run the job to completion.

        :return: List of :class:`ImportReport`, one per pass.
        """
        pass

    @abstractmethod
    def process(self, line):
        """
        Turn one data line into a record, or None to skip it.
        """
        pass

    @abstractmethod
    def store_entry(self, records, report):
        """
        Write a batch of records and update ``report``.
        """
        pass
