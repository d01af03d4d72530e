import logging


def get_logger(module, name=None):
    """Get a logger for the given module and, optionally, class.

    Parameters:
      module(str): The name of the module requesting the logger.
      name(type or str): An optional class or name to qualify it with.

    Returns:
      logging.Logger
    """
    logger_fqn = module
    if name is not None:
        if isinstance(name, type):
            name = name.__name__
        logger_fqn += "." + name

    return logging.getLogger(logger_fqn)
