import logging

from protein_network_loader.helpers.parser.parser import iter_data_lines, open_text, parse_alias_line


class AliasResolver:
    """
    In-memory identifier -> preferred alias lookup built from a STRING alias file.

    The alias file lists many aliases per protein; the first alias seen for an
    identifier is kept and later lines for the same identifier are ignored.
    Lines with fewer than two tab separated fields are skipped and counted in
    :attr:`skipped`.

    The whole map lives in memory, which is fine at proteome scale (around
    10^5 identifiers). Callers only rely on :meth:`resolve`, ``in`` and
    ``len``, so the lookup can move to an on-disk index without touching them.

    Example Usage:

        .. code-block:: python

            resolver = AliasResolver.from_file('data/9606.protein.aliases.v12.0.txt')
            resolver.resolve('9606.ENSP00000000233', default='ARF5')
    """

    def __init__(self, aliases=None, logger=None):
        self.logger = logger or logging.getLogger("protein_network_loader")
        self._aliases = dict(aliases or {})
        self.skipped = 0

    @classmethod
    def from_file(cls, path, logger=None):
        resolver = cls(logger=logger)
        resolver.logger.info(f"Reading aliases from {path}")
        with open_text(path) as handle:
            resolver.load(handle)
        resolver.logger.info(f"Resolved {len(resolver)} aliases ({resolver.skipped} malformed lines skipped)")
        return resolver

    def load(self, handle):
        """
        Adds the aliases found in ``handle`` without overriding known identifiers.

        :param handle: Iterable of text lines.
        """
        for line in iter_data_lines(handle):
            parsed = parse_alias_line(line)
            if parsed is None:
                self.skipped += 1
                self.logger.debug(f"Skipping malformed alias line: {line!r}")
                continue
            identifier, alias = parsed
            if identifier not in self._aliases:
                self._aliases[identifier] = alias
        return self

    def resolve(self, identifier, default=None):
        return self._aliases.get(identifier, default)

    get = resolve

    def __contains__(self, identifier):
        return identifier in self._aliases

    def __len__(self):
        return len(self._aliases)
