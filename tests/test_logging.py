import logging

from ludoteca.utils.logging import ColoredFormatter, configure_logging, log_success


def test_helpers_print_level_and_message(capsys):
    log_success("Catan emprestado")
    out = capsys.readouterr().out
    assert "[SUCCESS] Catan emprestado" in out


def test_formatter_prefixes_logger_name():
    record = logging.LogRecord("ludoteca.services.store", logging.WARNING, __file__, 1, "denied %s", ("list",), None)
    line = ColoredFormatter().format(record)
    assert "[WARNING] ludoteca.services.store: denied list" in line


def test_configure_logging_sets_root_level():
    root = logging.getLogger()
    previous = root.handlers, root.level
    try:
        configure_logging("debug")
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, ColoredFormatter)
    finally:
        root.handlers, root.level = previous[0], previous[1]
