"""
Store contract used by the importers, and its SQLAlchemy implementation.

Importers never touch sessions or tables directly. They only call the write
operations below, so a different backend can be plugged in by subclassing
:class:`ProteinStore`. The bulk methods default to looping over the single
record operations; the SQLAlchemy store overrides them with one statement
per batch.
"""

from abc import ABC, abstractmethod

from sqlalchemy import func, insert
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError

from protein_network_loader.helpers.exceptions import StoreError
from protein_network_loader.sql.base.database_manager import DatabaseManager
from protein_network_loader.sql.model import EnrichmentTerm, Protein, ProteinLink


class ProteinStore(ABC):

    @abstractmethod
    def upsert_protein(self, identifier, fields, create_defaults=None):
        """
        Insert or update the protein keyed by ``identifier``.

        On update only ``fields`` are written. On create the row receives
        ``create_defaults`` and then ``fields``.

        :raises StoreError: On constraint violation or connectivity loss.
        """

    def upsert_proteins(self, records):
        """Bulk form of :meth:`upsert_protein` over ``(identifier, fields, create_defaults)`` tuples."""
        for identifier, fields, create_defaults in records:
            self.upsert_protein(identifier, fields, create_defaults)

    @abstractmethod
    def insert_enrichment_term(self, fields):
        """Insert one enrichment term row, duplicates allowed."""

    def insert_enrichment_terms(self, rows):
        for fields in rows:
            self.insert_enrichment_term(fields)

    @abstractmethod
    def insert_protein_link(self, source, target, score):
        """Insert the directed link ``source -> target``; no-op if the ordered pair exists."""

    def insert_protein_links(self, rows):
        for source, target, score in rows:
            self.insert_protein_link(source, target, score)

    def close(self):
        pass


class SQLAlchemyProteinStore(ProteinStore):
    """
    :class:`ProteinStore` backed by the ORM tables.

    Upserts and link dedup are expressed with ``INSERT ... ON CONFLICT``, which
    PostgreSQL and SQLite both understand. Every write commits on success and
    rolls back before raising :class:`StoreError` on failure, so the session is
    always usable for the next batch.

    :param conf: Configuration dictionary used to build a :class:`DatabaseManager`.
    :param db_manager: Ready-made manager, takes precedence over ``conf``.
    """

    def __init__(self, conf=None, db_manager=None):
        self.db_manager = db_manager or DatabaseManager(conf)
        self.engine = self.db_manager.get_engine()
        self.session = self.db_manager.get_session()

    def _dialect_insert(self, table):
        dialect = self.engine.dialect.name
        if dialect == 'postgresql':
            return postgresql.insert(table)
        if dialect == 'sqlite':
            return sqlite.insert(table)
        raise StoreError(f"Conflict-aware inserts are not supported on the '{dialect}' dialect")

    def _execute(self, statement, params=None, action='write'):
        try:
            if params is None:
                self.session.execute(statement)
            else:
                self.session.execute(statement, params)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(f"Failed to {action}: {e}") from e

    def upsert_protein(self, identifier, fields, create_defaults=None):
        self.upsert_proteins([(identifier, fields, create_defaults)])

    def upsert_proteins(self, records):
        for update_columns, rows in _protein_runs(records):
            table = Protein.__table__
            statement = self._dialect_insert(table).values(rows)
            set_ = {column: statement.excluded[column] for column in update_columns}
            set_['updated_at'] = func.now()
            statement = statement.on_conflict_do_update(index_elements=[table.c.id], set_=set_)
            self._execute(statement, action=f"upsert {len(rows)} proteins")

    def insert_enrichment_term(self, fields):
        self.insert_enrichment_terms([fields])

    def insert_enrichment_terms(self, rows):
        rows = list(rows)
        if not rows:
            return
        self._execute(insert(EnrichmentTerm.__table__), rows, action=f"insert {len(rows)} enrichment terms")

    def insert_protein_link(self, source, target, score):
        self.insert_protein_links([(source, target, score)])

    def insert_protein_links(self, rows):
        params = [
            {'source_id': source, 'target_id': target, 'combined_score': score}
            for source, target, score in rows
        ]
        if not params:
            return
        statement = self._dialect_insert(ProteinLink.__table__).on_conflict_do_nothing(
            index_elements=['source_id', 'target_id'])
        self._execute(statement, params, action=f"insert {len(params)} protein links")

    def close(self):
        self.session.close()
        self.db_manager.dispose()


def _protein_runs(records):
    """
    Groups consecutive upserts that write the same columns.

    A multi-row ``VALUES`` clause needs identical keys on every row, and
    ``ON CONFLICT DO UPDATE`` may touch a row only once per statement, so each
    run is also collapsed to the last record per identifier.

    :return: List of ``(update_columns, rows)`` pairs.
    """
    runs = []
    signature = None
    for identifier, fields, create_defaults in records:
        row = {'id': identifier}
        row.update(create_defaults or {})
        row.update(fields)
        current = (tuple(sorted(fields)), tuple(sorted(row)))
        if current != signature:
            runs.append((current[0], {}))
            signature = current
        runs[-1][1][identifier] = row
    return [(columns, list(rows.values())) for columns, rows in runs]
