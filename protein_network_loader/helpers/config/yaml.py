import yaml

from protein_network_loader.helpers.exceptions import ImportConfigurationError

DEFAULTS = {
    'DB_URI': None,
    'log_path': None,
    'data_dir': 'data',
    'protein_info_file': '9606.protein.info.v12.0.txt',
    'protein_alias_file': '9606.protein.aliases.v12.0.txt',
    'protein_sequences_file': '9606.protein.sequences.v12.0.fa',
    'enrichment_terms_file': '9606.protein.enrichment.terms.v12.0.txt',
    'protein_links_file': '9606.protein.links.full.v12.0.txt',
    'batch_size': 1000,
    'protein_progress_interval': 1000,
    'term_progress_interval': 10000,
    'link_progress_interval': 10000,
}

DB_KEYS = ('DB_USERNAME', 'DB_PASSWORD', 'DB_HOST', 'DB_PORT', 'DB_NAME')


def read_yaml_config(filepath):
    """
    Reads a YAML file and returns its content as a dictionary.

    :param filepath: Path to the YAML file.
    :return: Dictionary with the configuration.
    """
    with open(filepath, "r") as file:
        config = yaml.safe_load(file)
    return config


def load_config(filepath):
    """
    Reads the YAML configuration and fills in the import defaults.

    Database credentials are only required when no ``DB_URI`` is given.

    :param filepath: Path to the YAML file.
    :return: Configuration dictionary with every known key present.
    :raises ImportConfigurationError: If the file is empty or database settings are missing.
    """
    conf = read_yaml_config(filepath)
    if not isinstance(conf, dict):
        raise ImportConfigurationError(f"Configuration file {filepath} is empty or not a mapping")

    merged = dict(DEFAULTS)
    merged.update(conf)

    if not merged['DB_URI']:
        missing = [key for key in DB_KEYS if merged.get(key) in (None, '')]
        if missing:
            raise ImportConfigurationError(f"Missing database settings: {', '.join(missing)}")

    for key in ('batch_size', 'protein_progress_interval', 'term_progress_interval', 'link_progress_interval'):
        if not isinstance(merged[key], int) or merged[key] <= 0:
            raise ImportConfigurationError(f"{key} must be a positive integer, got {merged[key]!r}")

    return merged
