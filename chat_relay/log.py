import logging


def log() -> logging.Logger:
    log = logging.getLogger("chat-relay")

    if not log.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "[%(asctime)s] (%(name)s) %(levelname)s :: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S %Z",
        )
        handler.setFormatter(formatter)
        log.addHandler(handler)
        # create_app() replaces this with the configured LOG_LEVEL
        log.setLevel(logging.DEBUG)

    return log
