import logging
import os

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(name, log_dir=None):
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    formatter = logging.Formatter(LOG_FORMAT)

    # Loggers outlive a single job; add each handler only once per name and file.
    if not any(type(handler) is logging.StreamHandler for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.setLevel(logging.INFO)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if log_dir:
        if not os.path.exists(log_dir):
            os.makedirs(log_dir)

        open_files = {handler.baseFilename for handler in logger.handlers
                      if isinstance(handler, logging.FileHandler)}
        added = False
        for filename, level in (('info.log', logging.INFO), ('debug.log', logging.DEBUG)):
            path = os.path.abspath(os.path.join(log_dir, filename))
            if path in open_files:
                continue
            file_handler = logging.FileHandler(path)
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
            added = True

        if added:
            logger.info(f"Logs are being saved to: {log_dir}")

    return logger
