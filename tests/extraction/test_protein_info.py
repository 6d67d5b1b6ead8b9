from unittest.mock import MagicMock

import pytest

from protein_network_loader.helpers.exceptions import ImportConfigurationError, StoreError
from protein_network_loader.operation.extraction.aliases import AliasResolver
from protein_network_loader.operation.extraction.protein_info import ProteinInfoImporter, ProteinInfoPass
from protein_network_loader.sql.model import Protein
from protein_network_loader.sql.store import ProteinStore


def write_inputs(conf, info="", aliases="", fasta=""):
    import os
    for key, content in (('protein_info_file', info),
                         ('protein_alias_file', aliases),
                         ('protein_sequences_file', fasta)):
        with open(os.path.join(conf['data_dir'], conf[key]), 'w') as f:
            f.write(content)


def proteins(store):
    store.session.expire_all()
    return {protein.id: protein for protein in store.session.query(Protein).all()}


def test_metadata_without_alias_falls_back_to_name(conf, store):
    write_inputs(conf, info="#header\nP1\tAlpha\t100\tsome annotation\n")

    ProteinInfoImporter(conf, store=store).start(ProteinInfoPass.METADATA)

    protein = proteins(store)['P1']
    assert (protein.id, protein.name, protein.alias, protein.size, protein.annotation, protein.sequence) == \
        ('P1', 'Alpha', 'Alpha', '100', 'some annotation', None)


def test_metadata_uses_first_resolved_alias(conf, store):
    write_inputs(conf,
                 info="P1\tAlpha\t100\tx\nP2\tBeta\t200\ty\n",
                 aliases="#id\talias\nP1\tALPHA1\nP1\tALPHA2\n")

    ProteinInfoImporter(conf, store=store).start(ProteinInfoPass.METADATA)

    rows = proteins(store)
    assert rows['P1'].alias == 'ALPHA1'
    assert rows['P2'].alias == 'Beta'


def test_injected_resolver_is_used(conf, store):
    write_inputs(conf, info="P1\tAlpha\t100\tx\n")

    importer = ProteinInfoImporter(conf, store=store, alias_resolver=AliasResolver({'P1': 'A1'}))
    importer.start(ProteinInfoPass.METADATA)

    assert proteins(store)['P1'].alias == 'A1'


def test_full_run_merges_sequences(conf, store):
    write_inputs(conf,
                 info="P1\tAlpha\t6\tx\nP2\tBeta\t3\ty\n",
                 fasta=">P1\nABC\nDEF\n>P3\nMKV\n>P2\n")

    reports = ProteinInfoImporter(conf, store=store).start()

    rows = proteins(store)
    assert rows['P1'].sequence == 'ABCDEF'
    assert rows['P1'].name == 'Alpha'
    assert rows['P2'].sequence is None
    assert rows['P3'].name == 'Unknown protein P3'
    assert rows['P3'].alias == 'Unknown protein P3'
    assert rows['P3'].sequence == 'MKV'
    assert [report.imported for report in reports] == [2, 2]
    assert reports[1].mismatched == 0


def test_metadata_rerun_clears_sequences(conf, store):
    write_inputs(conf, info="P1\tAlpha\t6\tx\n", fasta=">P1\nABC\n")
    ProteinInfoImporter(conf, store=store).start()

    ProteinInfoImporter(conf, store=store).start(ProteinInfoPass.METADATA)

    assert proteins(store)['P1'].sequence is None


def test_malformed_metadata_lines_are_counted(conf, store):
    write_inputs(conf, info="P1\tAlpha\t1\tx\nbroken\n\nP2\tBeta\t2\ty\n")

    report, = ProteinInfoImporter(conf, store=store).start(ProteinInfoPass.METADATA)

    assert report.imported == 2
    assert report.skipped == 2


def test_sequence_pass_alone_requires_acknowledgement(conf):
    importer = ProteinInfoImporter(conf, store=MagicMock(spec=ProteinStore))

    with pytest.raises(ImportConfigurationError):
        importer.start(ProteinInfoPass.SEQUENCES)


def test_sequence_pass_alone_when_acknowledged(conf, store):
    write_inputs(conf, fasta=">X\nABC\nDEF\n")

    reports = ProteinInfoImporter(conf, store=store).start('sequences', allow_stale_sequences=True)

    assert len(reports) == 1
    assert proteins(store)['X'].sequence == 'ABCDEF'


def test_fasta_record_yields_exactly_one_upsert(conf):
    write_inputs(conf, fasta=">X\nABC\nDEF\n>EMPTY\n")
    fake_store = MagicMock(spec=ProteinStore)

    ProteinInfoImporter(conf, store=fake_store).start(ProteinInfoPass.SEQUENCES, allow_stale_sequences=True)

    fake_store.upsert_proteins.assert_called_once_with([
        ('X', {'sequence': 'ABCDEF'}, {'name': 'Unknown protein X', 'alias': 'Unknown protein X'}),
    ])


def test_failed_sequence_upserts_are_counted_as_mismatches(conf):
    write_inputs(conf, fasta=">A\nMK\n>B\nMV\n>C\nML\n")
    fake_store = MagicMock(spec=ProteinStore)
    fake_store.upsert_proteins.side_effect = StoreError("batch failed")
    fake_store.upsert_protein.side_effect = [None, StoreError("foreign key"), None]

    report, = ProteinInfoImporter(conf, store=fake_store).start(
        ProteinInfoPass.SEQUENCES, allow_stale_sequences=True)

    assert report.imported == 2
    assert report.mismatched == 1
    retried = [call.args[0] for call in fake_store.upsert_protein.call_args_list]
    assert retried == ['A', 'B', 'C']


def test_metadata_store_failure_is_fatal(conf):
    write_inputs(conf, info="P1\tAlpha\t1\tx\n")
    fake_store = MagicMock(spec=ProteinStore)
    fake_store.upsert_proteins.side_effect = StoreError("connection lost")

    with pytest.raises(StoreError):
        ProteinInfoImporter(conf, store=fake_store).start(ProteinInfoPass.METADATA)


def test_missing_input_file_raises(conf):
    importer = ProteinInfoImporter(conf, store=MagicMock(spec=ProteinStore))

    with pytest.raises(FileNotFoundError):
        importer.start()


def test_sample_files(sample_conf, store):
    reports = ProteinInfoImporter(sample_conf, store=store).start()

    rows = proteins(store)
    assert rows['9606.ENSP00000000233'].alias == 'ARF5'
    assert rows['9606.ENSP00000000233'].sequence.startswith('MGLTVSALFSRIFGKK')
    assert rows['9606.ENSP00000000233'].sequence.endswith('LRDAV')
    assert rows['9606.ENSP00000000412'].sequence is None
    assert rows['9606.ENSP00000002125'].name == 'Unknown protein 9606.ENSP00000002125'
    assert reports[0].imported == 3
    assert reports[1].imported == 2


def test_progress_lines_and_summaries(conf, store, importer_messages):
    conf = dict(conf, protein_progress_interval=2)
    write_inputs(conf,
                 info="P1\tA\t1\tx\nP2\tB\t1\tx\nP3\tC\t1\tx\n",
                 fasta="".join(f">S{i}\nMK\n" for i in range(5)))
    messages = importer_messages('ProteinInfoImporter')

    ProteinInfoImporter(conf, store=store).start()

    progress = [message for message in messages()
                if message.startswith(('Imported', 'Finished', 'Encountered'))]
    assert progress == [
        'Imported 2 proteins',
        'Finished importing 3 proteins',
        'Imported 2 FASTA sequences',
        'Imported 4 FASTA sequences',
        'Finished importing 5 FASTA sequences',
        'Encountered 0 mismatches',
    ]


def test_default_progress_interval(conf):
    conf = {key: value for key, value in conf.items() if key != 'protein_progress_interval'}

    importer = ProteinInfoImporter(conf, store=MagicMock(spec=ProteinStore))

    assert importer.progress_interval == 1000
