import abc
import time
import typing
import logging


class BaseLogger(abc.ABC):
    """
    Interface that must be implemented to satisfy smpptlv's logger.
    User implementations should inherit this class and
    implement the :func:`bind <BaseLogger.bind>` and :func:`log <BaseLogger.log>` methods with the type signatures shown.

    smpptlv logs events as dicts, eg:

    .. code-block:: python

        {"event": "smpptlv.SubmitSm.on_tlv_insert", "stage": "end", "cleared_sm_length": 11}
    """

    @abc.abstractmethod
    def bind(self, level: typing.Union[str, int], log_metadata: dict) -> None:
        """
        called when a PDU or codec is instantiated with the loglevel & log_metadata that the user supplied to it.
        PDUs add their `smpp_command` to the log_metadata.

        Parameters:
            level: logging level eg DEBUG
            log_metadata: metadata to be included in all events
        """
        raise NotImplementedError("`bind` method must be implemented.")

    @abc.abstractmethod
    def log(self, level: int, log_data: dict) -> None:
        """
        called by smpptlv everytime it emits an event.

        Parameters:
            level: logging level eg `logging.DEBUG`
            log_data: the event
        """
        raise NotImplementedError("`log` method must be implemented.")


class SimpleLogger(BaseLogger):
    """
    This is an implementation of BaseLogger.
    It renders every event as one line; a dict of the timestamp, the event and the bound metadata.

    example usage:

    .. highlight:: python
    .. code-block:: python

        logger = SimpleLogger("myLogger")
        logger.bind(level="DEBUG", log_metadata={"smpp_command": "submit_sm"})
        logger.log(logging.DEBUG, {"event": "smpptlv.SubmitSm.on_tlv_insert", "cleared_sm_length": 11})
        # {'timestamp': '2020-01-01 00:00:00,000', 'event': 'smpptlv.SubmitSm.on_tlv_insert', 'cleared_sm_length': 11, 'smpp_command': 'submit_sm'}
    """

    def __init__(self, logger_name: str, handler: typing.Union[None, logging.Handler] = None):
        """
        Parameters:
            logger_name: name of the python logger to log to.
            handler: python logging `handler <https://docs.python.org/3/library/logging.html#logging.Handler>`_ to be attached to that logger.
                     By default, `logging.StreamHandler` is used.
        """
        if not isinstance(logger_name, str):
            raise ValueError(
                "`logger_name` should be of type:: `str` You entered: {0}".format(type(logger_name))
            )
        if not isinstance(handler, (type(None), logging.Handler)):
            raise ValueError(
                "`handler` should be of type:: `None` or `logging.Handler` You entered: {0}".format(
                    type(handler)
                )
            )

        self.logger_name = logger_name
        self.handler = handler
        self.logger: typing.Union[None, EventAdapter] = None

    def bind(self, level: typing.Union[str, int], log_metadata: dict) -> None:
        level = self._to_level(level)

        _logger = logging.getLogger(self.logger_name)
        if self.handler is None:
            if not _logger.handlers:
                _logger.addHandler(logging.StreamHandler())
        elif self.handler not in _logger.handlers:
            self.handler.setFormatter(logging.Formatter("%(message)s"))
            _logger.addHandler(self.handler)
        _logger.setLevel(level)
        self.logger = EventAdapter(_logger, dict(log_metadata))

    def log(self, level: int, log_data: dict) -> None:
        if self.logger is None:
            self.bind(level=level, log_metadata={})
        self.logger.log(level, log_data)

    @staticmethod
    def _to_level(level: typing.Union[str, int]) -> int:
        if isinstance(level, int):
            return level
        _level = logging.getLevelName(level.upper())
        if not isinstance(_level, int):
            raise ValueError(
                "`level` should be one of; 'NOTSET', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'"
            )
        return _level


class EventAdapter(logging.LoggerAdapter):
    """
    Merges the bound metadata into every event and puts a timestamp first.
    """

    _formatter = logging.Formatter()

    def process(self, msg, kwargs):
        event = {"timestamp": self.timestamp(), **msg, **self.extra}
        return "{0}".format(event), kwargs

    def timestamp(self) -> str:
        now = time.time()
        t = time.strftime(self._formatter.default_time_format, time.localtime(now))
        return self._formatter.default_msec_format % (t, (now - int(now)) * 1000)
