import logging
def get_logger(name:str="dmcache"):
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    return logging.getLogger(name)

def set_debug(name:str="dmcache", debug:bool=False):
    """Turns per-access DEBUG output on or off; off falls back to the parent's level."""
    logging.getLogger(name).setLevel(logging.DEBUG if debug else logging.NOTSET)
