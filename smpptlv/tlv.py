import struct
import typing

from .tag import TlvTag
from .value import MAX_VALUE_LENGTH, OtherValue, TlvValue


class Tlv:
    """
    An SMPP optional parameter as it is placed on the wire.

    Optional Parameters MUST always appear at the end of a message, in the `Optional Parameters` section of the SMPP PDU.
    However, they may be included in ANY ORDER within the `Optional Parameters` section of the SMPP PDU
    and NEED NOT be encoded in the order presented in the smpp document.

    Use :func:`new <Tlv.new>` for optional parameters that SMPP defines and
    the `new_custom*` constructors for vendor specific ones.
    Those constructors always produce a record whose `value_length` equals the encoded length of its value.

    Usage:

    .. highlight:: python
    .. code-block:: python

        import smpptlv

        tlv = smpptlv.Tlv.new(smpptlv.KnownValue(smpptlv.Tag.USER_MESSAGE_REFERENCE, 7))
        custom = smpptlv.Tlv.new_custom_u32(0x1400, 100_000)
        custom.extract_u32()  # 100000
    """

    def __init__(
        self, tag: TlvTag, value_length: int = 0, value: typing.Union[None, TlvValue] = None
    ) -> None:
        """
        Parameters:
            tag: the tag of the optional parameter.
            value_length: length of the value part in octets.
            value: the value of the optional parameter. `None` for zero length parameters.
        """
        self._tag = tag
        self._value_length = value_length
        self._value = value

    @classmethod
    def new(cls, value: TlvValue) -> "Tlv":
        """
        Creates a TLV whose tag and length are derived from the given value.

        Parameters:
            value: the value of the optional parameter.
        """
        if not isinstance(value, TlvValue):
            raise ValueError(
                "`value` should be of type:: `TlvValue` You entered: {0}".format(type(value))
            )
        return cls(tag=value.tag, value_length=value.length, value=value)

    @classmethod
    def new_custom(cls, tag: int, value: typing.Union[bytes, bytearray]) -> "Tlv":
        """
        Creates a custom TLV with an arbitrary tag and value bytes.

        This is meant for vendor-specific TLVs with tags in the range 0x1400 - 0x3FFF.
        The tag is not checked against that range; any 16bit tag is accepted so as to interoperate with SMSCs
        that do not conform to the SMPP specification.

        Parameters:
            tag: the numeric tag.
            value: the raw bytes of the value.
        """
        other_value = OtherValue(tag=TlvTag.other(tag), value=value)
        return cls.new(other_value)

    @classmethod
    def new_custom_u16(cls, tag: int, value: int) -> "Tlv":
        """
        Creates a custom TLV from an unsigned 16bit integer (big-endian).
        """
        return cls.new_custom(tag, cls._pack_int(">H", value))

    @classmethod
    def new_custom_u32(cls, tag: int, value: int) -> "Tlv":
        """
        Creates a custom TLV from an unsigned 32bit integer (big-endian).
        """
        return cls.new_custom(tag, cls._pack_int(">I", value))

    @classmethod
    def new_custom_u64(cls, tag: int, value: int) -> "Tlv":
        """
        Creates a custom TLV from an unsigned 64bit integer (big-endian).
        """
        return cls.new_custom(tag, cls._pack_int(">Q", value))

    @classmethod
    def new_custom_string(cls, tag: int, value: str) -> "Tlv":
        """
        Creates a custom TLV from a string; the value is the utf-8 encoding of the string followed by a NULL octet.
        """
        if not isinstance(value, str):
            raise ValueError("`value` should be of type:: `str` You entered: {0}".format(type(value)))
        return cls.new_custom(tag, value.encode("utf-8") + chr(0).encode("ascii"))

    @staticmethod
    def _pack_int(fmt: str, value: int) -> bytes:
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValueError("`value` should be of type:: `int` You entered: {0}".format(type(value)))
        try:
            return struct.pack(fmt, value)
        except struct.error as e:
            raise ValueError(
                "`value` {0} does not fit in an unsigned int of {1} octets".format(
                    value, struct.calcsize(fmt)
                )
            ) from e

    @property
    def tag(self) -> TlvTag:
        return self._tag

    @property
    def value_length(self) -> int:
        return self._value_length

    @property
    def value(self) -> typing.Union[None, TlvValue]:
        return self._value

    def extract_raw_bytes(self) -> typing.Union[None, bytes]:
        """
        Returns the value bytes of a custom TLV.
        It returns `None` for TLVs whose value is not raw bytes, ie those built from a known value.
        """
        if isinstance(self._value, OtherValue):
            return self._value.value
        return None

    def extract_u16(self) -> typing.Union[None, int]:
        """
        Returns the value of a custom TLV as an unsigned 16bit integer (big-endian),
        or `None` if the value is not exactly 2 octets.
        """
        return self._unpack_int(">H")

    def extract_u32(self) -> typing.Union[None, int]:
        """
        Returns the value of a custom TLV as an unsigned 32bit integer (big-endian),
        or `None` if the value is not exactly 4 octets.
        """
        return self._unpack_int(">I")

    def extract_u64(self) -> typing.Union[None, int]:
        """
        Returns the value of a custom TLV as an unsigned 64bit integer (big-endian),
        or `None` if the value is not exactly 8 octets.
        """
        return self._unpack_int(">Q")

    def _unpack_int(self, fmt: str) -> typing.Union[None, int]:
        raw = self.extract_raw_bytes()
        if raw is None or len(raw) != struct.calcsize(fmt):
            return None
        return struct.unpack(fmt, raw)[0]

    def extract_string(self) -> typing.Union[None, str]:
        """
        Returns the value of a custom TLV as a utf-8 string, with one trailing NULL octet removed if present.
        It returns `None` if the value is not raw bytes or is not valid utf-8.
        """
        raw = self.extract_raw_bytes()
        if raw is None:
            return None
        if raw.endswith(chr(0).encode("ascii")):
            raw = raw[:-1]
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            return None

    def encode(self) -> bytes:
        """
        Returns the bytes representation of the optional parameter.
        Tag & Length are each Int, 2octet. Ints in smpp are unsigned. Hence use ">H" in struct pack
        """
        if self._value_length > MAX_VALUE_LENGTH:
            raise ValueError(
                "`value_length` should be at most {0} You entered: {1}".format(
                    MAX_VALUE_LENGTH, self._value_length
                )
            )
        header = struct.pack(">HH", self._tag.code, self._value_length)
        if self._value is None:
            return header
        return header + self._value.encode()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tlv):
            return NotImplemented
        return (
            self._tag == other._tag
            and self._value_length == other._value_length
            and self._value == other._value
        )

    def __hash__(self) -> int:
        return hash((self._tag, self._value_length, self._value))

    def __repr__(self) -> str:
        return "Tlv(tag={0!r}, value_length={1!r}, value={2!r})".format(
            self._tag, self._value_length, self._value
        )
