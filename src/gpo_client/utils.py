import logging

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s - raised_by: %(name)s'


def logger_setup(logger_name="GPO Client", log_level=logging.INFO, propagate=False):
    """Named logger for one gpo_client component (client, HTTP), writing to the console."""
    logger = logging.getLogger(logger_name)

    # GPOClient and GPOHttp call this on every construction; reuse the handler
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(handler)

    # the newest client's log_level wins
    for handler in logger.handlers:
        handler.setLevel(log_level)
    logger.setLevel(log_level)
    logger.propagate = propagate

    return logger
