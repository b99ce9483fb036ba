import abc
import struct
import typing
import logging

from . import log
from .tag import TlvTag
from .tlv import Tlv
from .value import KnownValue, OtherValue, TlvValue


# Tag, Integer, 2octets + Length, Integer, 2octets
TLV_HEADER_LENGTH: int = 4


class TlvDecodeError(Exception):
    """
    Error raised when bytes cannot be decoded into TLVs.
    """

    pass


class BaseTlvCodec(abc.ABC):
    """
    Interface that must be implemented to satisfy smpptlv's TLV codec.
    User implementations should inherit this class and
    implement the :func:`encode <BaseTlvCodec.encode>` and :func:`decode <BaseTlvCodec.decode>` methods with the type signatures shown.

    A codec turns the `Optional Parameters` section of an SMPP PDU into TLVs and back.
    """

    @abc.abstractmethod
    def encode(self, tlvs: typing.Iterable[Tlv]) -> bytes:
        """
        return the wire representation of the given TLVs, in order.

        Parameters:
            tlvs: the TLVs to encode
        """
        raise NotImplementedError("encode method must be implemented.")

    @abc.abstractmethod
    def decode(self, data: bytes) -> typing.List[Tlv]:
        """
        return the TLVs found in the given bytes, in the order in which they appear.

        Parameters:
            data: the `Optional Parameters` section of a PDU
        """
        raise NotImplementedError("decode method must be implemented.")


class SimpleTlvCodec(BaseTlvCodec):
    """
    This is an implementation of BaseTlvCodec.

    Optional parameters whose tag is known are decoded into :class:`KnownValue <smpptlv.value.KnownValue>`;
    all other tags(vendor specific or otherwise) are decoded into :class:`OtherValue <smpptlv.value.OtherValue>`.
    A zero length optional parameter is decoded into a TLV without a value.

    Example Usage:

    .. highlight:: python
    .. code-block:: python

        import smpptlv

        codec = smpptlv.SimpleTlvCodec()
        data = codec.encode([smpptlv.Tlv.new_custom_u16(0x1400, 5)])
        codec.decode(data)
    """

    def __init__(
        self,
        logger: typing.Union[None, log.BaseLogger] = None,
        loglevel: str = "INFO",
        log_metadata: typing.Union[None, dict] = None,
    ) -> None:
        """
        Parameters:
            logger: an instance of `smpptlv.log.BaseLogger` to be used for logging
            loglevel: the level at which to log
            log_metadata: metadata that will be included in all log statements
        """
        if not isinstance(logger, (type(None), log.BaseLogger)):
            raise ValueError(
                "`logger` should be of type:: `None` or `smpptlv.log.BaseLogger` You entered: {0}".format(
                    type(logger)
                )
            )
        if not isinstance(loglevel, str):
            raise ValueError(
                "`loglevel` should be of type:: `str` You entered: {0}".format(type(loglevel))
            )
        if not isinstance(log_metadata, (type(None), dict)):
            raise ValueError(
                "`log_metadata` should be of type:: `None` or `dict` You entered: {0}".format(
                    type(log_metadata)
                )
            )

        if logger is not None:
            self.logger = logger
        else:
            self.logger = log.SimpleLogger("smpptlv.codec")
        self.logger.bind(level=loglevel, log_metadata=log_metadata or {})

    def encode(self, tlvs: typing.Iterable[Tlv]) -> bytes:
        return b"".join(tlv.encode() for tlv in tlvs)

    def decode(self, data: bytes) -> typing.List[Tlv]:
        if not isinstance(data, (bytes, bytearray)):
            raise TlvDecodeError(
                "`data` should be of type:: `bytes` You entered: {0}".format(type(data))
            )

        tlvs: typing.List[Tlv] = []
        position = 0
        while position < len(data):
            if len(data) - position < TLV_HEADER_LENGTH:
                raise TlvDecodeError(
                    "truncated TLV header at offset {0}: need {1} octets, have {2}".format(
                        position, TLV_HEADER_LENGTH, len(data) - position
                    )
                )
            code, value_length = struct.unpack(
                ">HH", data[position : position + TLV_HEADER_LENGTH]
            )
            position += TLV_HEADER_LENGTH
            if len(data) - position < value_length:
                raise TlvDecodeError(
                    "truncated TLV value for tag {0} at offset {1}: need {2} octets, have {3}".format(
                        hex(code), position, value_length, len(data) - position
                    )
                )
            raw = bytes(data[position : position + value_length])
            position += value_length

            tag = TlvTag.from_code(code)
            tlvs.append(Tlv(tag=tag, value_length=value_length, value=self._decode_value(tag, raw)))

        return tlvs

    def _decode_value(self, tag: TlvTag, raw: bytes) -> typing.Union[None, TlvValue]:
        if not raw:
            return None
        if not tag.is_known:
            self._log(
                logging.DEBUG,
                {
                    "event": "smpptlv.SimpleTlvCodec.decode",
                    "stage": "end",
                    "state": "unknown tag decoded as raw bytes",
                    "tag": hex(tag.code),
                    "vendor": tag.is_vendor,
                },
            )
            return OtherValue(tag=tag, value=raw)

        try:
            return KnownValue.decode(tag, raw)
        except ValueError as e:
            raise TlvDecodeError(
                "unable to decode value of tag `{0}`: {1}".format(tag.name, str(e))
            ) from e

    def _log(self, level: int, log_data: dict) -> None:
        # if the supplied logger is unable to log; we move on
        try:
            self.logger.log(level, log_data)
        except Exception:
            pass
