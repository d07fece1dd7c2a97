import logging


def setup_logging(program, verbose=False):
    """Sets up the default Python logger to log to stderr.

    Args:
      program: Name of the program logging informations.
      verbose: If true, log more messages (DEBUG instead of INFO).
    """
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        program + ': [%(levelname)s] %(message)s'
    ))
    root = logging.getLogger('')
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    return handler
