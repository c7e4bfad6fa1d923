import logging


def setup_logging(verbose: bool = False) -> logging.Logger:
    logger = logging.getLogger("escpos_engine")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # avoid duplicate handlers if called twice
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)
    return logger
