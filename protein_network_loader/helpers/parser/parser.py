import gzip

COMMENT_PREFIX = '#'
LINKS_HEADER_TOKEN = 'protein1'


def open_text(path):
    """
    Opens a flat file for streaming text reads.

    STRING distributes its files gzip-compressed; paths ending in ``.gz`` are
    decompressed on the fly so they never need to be unpacked on disk.

    :param path: Path to the input file.
    :return: Text file handle.
    """
    path = str(path)
    if path.endswith('.gz'):
        return gzip.open(path, 'rt', encoding='utf-8')
    return open(path, 'r', encoding='utf-8')


def iter_data_lines(handle, comment_prefix=COMMENT_PREFIX):
    """
    Yields the lines of ``handle`` without line terminators, skipping comments.

    :param handle: Iterable of text lines.
    :param comment_prefix: Lines starting with this prefix are skipped. ``None`` keeps every line.
    """
    for line in handle:
        line = line.rstrip('\r\n')
        if comment_prefix and line.startswith(comment_prefix):
            continue
        yield line


def parse_alias_line(line):
    """
    Parses ``identifier<TAB>alias[<TAB>source...]``.

    :return: ``(identifier, alias)`` or None when the line has fewer than two fields.

    :Example:

    >>> parse_alias_line("9606.ENSP00000000233\\tARF5\\tEnsembl_HGNC")
    ('9606.ENSP00000000233', 'ARF5')
    >>> parse_alias_line("9606.ENSP00000000233") is None
    True
    """
    fields = line.split('\t')
    if len(fields) < 2 or not fields[0]:
        return None
    return fields[0], fields[1]


def parse_protein_info_line(line):
    """
    Parses ``identifier<TAB>preferred_name<TAB>size<TAB>annotation``.

    Size and annotation are optional and come back as None when absent.

    :return: ``(identifier, preferred_name, size, annotation)`` or None.
    """
    fields = line.split('\t')
    if len(fields) < 2 or not fields[0]:
        return None
    identifier, preferred_name = fields[0], fields[1]
    size = fields[2] if len(fields) > 2 else None
    annotation = fields[3] if len(fields) > 3 else None
    return identifier, preferred_name, size, annotation


def parse_enrichment_term_line(line):
    """
    Parses ``identifier<TAB>category<TAB>term<TAB>description``.

    :return: ``(identifier, category, term, description)`` or None.
    """
    fields = line.split('\t')
    if len(fields) < 3 or not fields[0]:
        return None
    description = fields[3] if len(fields) > 3 else None
    return fields[0], fields[1], fields[2], description


def parse_link_line(line):
    """
    Parses a space separated STRING link line.

    The first two fields are the endpoints and the last one is the combined
    score; the sub-scores in between are discarded.

    The header line is not recognised here; callers skip it by its leading
    ``LINKS_HEADER_TOKEN``.

    :return: ``(protein_a, protein_b, combined_score)`` or None for malformed lines.

    :Example:

    >>> parse_link_line("P1 P2 50 80 120")
    ('P1', 'P2', 120)
    """
    fields = line.split(' ')
    if len(fields) < 3 or not fields[0] or not fields[1]:
        return None
    try:
        combined_score = int(fields[-1])
    except ValueError:
        return None
    return fields[0], fields[1], combined_score
