import logging


def setup_logging(level: str, log_file: str | None = None) -> None:
    handlers: list[logging.Handler] | None = None
    if log_file:
        # o painel ocupa o terminal; logs em stderr corromperiam a tela
        handlers = [logging.FileHandler(log_file, encoding="utf-8")]

    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=handlers,
    )

    # “Corta” barulho de libs
    noisy = [
        "urllib3",
        "requests",
        "markdown_it",
    ]
    for name in noisy:
        logging.getLogger(name).setLevel(logging.WARNING)
