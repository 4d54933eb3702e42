import os
import logging

LOGGERS = ("avl_engine", "avl_tree", "tree_list")

_TRUE = ("1", "true", "yes", "on")


def _flag(name, default):
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE


def get_config():

    debug = _flag("AVL_DEBUG", False)

    return {
        "debug": debug,

        # level for the project loggers when setup_logging() is called
        "log_level": os.environ.get("AVL_LOG_LEVEL", "DEBUG" if debug else "WARNING").upper(),

        # run AVLEngine.checkInvariants after every insert/delete (slow, O(n) per write)
        "validate_after_write": _flag("AVL_VALIDATE", debug),

        # output format used by print() when rendering through graphviz
        "graph_format": os.environ.get("AVL_GRAPH_FORMAT", "png"),
    }


def setup_logging(level = None):
    """
    attach a single stream handler to the project loggers, safe to call repeatedly
    """
    if level is None:
        level = get_config()["log_level"]
    formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(message)s')
    for name in LOGGERS:
        logger = logging.getLogger(name)
        if logger.hasHandlers():
            logger.handlers.clear()
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(level)
        # Prevent propagation to the root logger to avoid duplicate logs
        logger.propagate = False
    return [logging.getLogger(name) for name in LOGGERS]


if __name__ == '__main__':

    print(get_config())
