import abc
import struct
import typing

from .tag import Tag, TlvTag


MAX_VALUE_LENGTH: int = 0xFFFF


class ValueShape(typing.NamedTuple):
    """
    The generic shape of the Value field of a known optional parameter.
    """

    kind: str
    # width in octets, only meaningful for `int`
    size: int = 0


INT: str = "int"
CSTRING: str = "cstring"
OCTETS: str = "octets"
FLAG: str = "flag"

# B is for `unsigned char size 1`, H is for `unsigned short size 2` and I is  `unsigned int size 4`
# see: https://docs.python.org/3.8/library/struct.html#format-characters
_INT_FORMATS: typing.Dict[int, str] = {1: ">B", 2: ">H", 4: ">I"}

_INT1 = ValueShape(INT, 1)
_INT2 = ValueShape(INT, 2)
_INT4 = ValueShape(INT, 4)
_CSTRING = ValueShape(CSTRING)
_OCTETS = ValueShape(OCTETS)
_FLAG = ValueShape(FLAG)

SHAPES: typing.Dict[TlvTag, ValueShape] = {
    Tag.DEST_ADDR_SUBUNIT: _INT1,
    Tag.DEST_NETWORK_TYPE: _INT1,
    Tag.DEST_BEARER_TYPE: _INT1,
    Tag.DEST_TELEMATICS_ID: _INT2,
    Tag.SOURCE_ADDR_SUBUNIT: _INT1,
    Tag.SOURCE_NETWORK_TYPE: _INT1,
    Tag.SOURCE_BEARER_TYPE: _INT1,
    Tag.SOURCE_TELEMATICS_ID: _INT1,
    Tag.QOS_TIME_TO_LIVE: _INT4,
    Tag.PAYLOAD_TYPE: _INT1,
    Tag.ADDITIONAL_STATUS_INFO_TEXT: _CSTRING,
    Tag.RECEIPTED_MESSAGE_ID: _CSTRING,
    # the type of `ms_msg_wait_facilities` is a bitMask. but it is treated as an int
    Tag.MS_MSG_WAIT_FACILITIES: _INT1,
    Tag.PRIVACY_INDICATOR: _INT1,
    Tag.SOURCE_SUBADDRESS: _OCTETS,
    Tag.DEST_SUBADDRESS: _OCTETS,
    Tag.USER_MESSAGE_REFERENCE: _INT2,
    Tag.USER_RESPONSE_CODE: _INT1,
    Tag.SOURCE_PORT: _INT2,
    Tag.DESTINATION_PORT: _INT2,
    Tag.SAR_MSG_REF_NUM: _INT2,
    Tag.LANGUAGE_INDICATOR: _INT1,
    Tag.SAR_TOTAL_SEGMENTS: _INT1,
    Tag.SAR_SEGMENT_SEQNUM: _INT1,
    Tag.SC_INTERFACE_VERSION: _INT1,
    Tag.CALLBACK_NUM_PRES_IND: _INT1,
    Tag.CALLBACK_NUM_ATAG: _OCTETS,
    Tag.NUMBER_OF_MESSAGES: _INT1,
    Tag.CALLBACK_NUM: _OCTETS,
    Tag.DPF_RESULT: _INT1,
    Tag.SET_DPF: _INT1,
    Tag.MS_AVAILABILITY_STATUS: _INT1,
    Tag.NETWORK_ERROR_CODE: _OCTETS,
    Tag.MESSAGE_PAYLOAD: _OCTETS,
    Tag.DELIVERY_FAILURE_REASON: _INT1,
    Tag.MORE_MESSAGES_TO_SEND: _INT1,
    Tag.MESSAGE_STATE: _INT1,
    Tag.CONGESTION_STATE: _INT1,
    Tag.USSD_SERVICE_OP: _INT1,
    Tag.BROADCAST_CHANNEL_INDICATOR: _INT1,
    Tag.BROADCAST_CONTENT_TYPE: _OCTETS,
    Tag.BROADCAST_CONTENT_TYPE_INFO: _OCTETS,
    Tag.BROADCAST_MESSAGE_CLASS: _INT1,
    Tag.BROADCAST_REP_NUM: _INT2,
    Tag.BROADCAST_FREQUENCY_INTERVAL: _OCTETS,
    Tag.BROADCAST_AREA_IDENTIFIER: _OCTETS,
    Tag.BROADCAST_ERROR_STATUS: _INT4,
    Tag.BROADCAST_AREA_SUCCESS: _INT1,
    Tag.BROADCAST_END_TIME: _CSTRING,
    Tag.BROADCAST_SERVICE_GROUP: _OCTETS,
    Tag.BILLING_IDENTIFICATION: _OCTETS,
    Tag.SOURCE_NETWORK_ID: _CSTRING,
    Tag.DEST_NETWORK_ID: _CSTRING,
    Tag.SOURCE_NODE_ID: _OCTETS,
    Tag.DEST_NODE_ID: _OCTETS,
    Tag.DEST_ADDR_NP_RESOLUTION: _INT1,
    Tag.DEST_ADDR_NP_INFORMATION: _OCTETS,
    # a 5 octet integer; struct has no format for it so it is carried as octets
    Tag.DEST_ADDR_NP_COUNTRY: _OCTETS,
    Tag.DISPLAY_TIME: _INT1,
    Tag.SMS_SIGNAL: _INT2,
    Tag.MS_VALIDITY: _INT1,
    # see section 5.3.2.41 of smpp document. the TLV has no value field
    Tag.ALERT_ON_MESSAGE_DELIVERY: _FLAG,
    Tag.ITS_REPLY_TYPE: _INT1,
    Tag.ITS_SESSION_INFO: _OCTETS,
}


class TlvValue(abc.ABC):
    """
    The Value field of an SMPP optional parameter.
    It is either a :class:`KnownValue <KnownValue>` whose shape is decided by its tag,
    or an :class:`OtherValue <OtherValue>` that carries uninterpreted bytes under any tag.
    """

    def __init__(self, tag: TlvTag, value: typing.Any) -> None:
        self._tag = tag
        self._value = value

    @property
    def tag(self) -> TlvTag:
        return self._tag

    @property
    def value(self) -> typing.Any:
        return self._value

    @property
    @abc.abstractmethod
    def length(self) -> int:
        """
        The exact number of octets that :func:`encode <TlvValue.encode>` returns.
        """
        raise NotImplementedError("length method must be implemented.")

    @abc.abstractmethod
    def encode(self) -> bytes:
        """
        Returns the bytes of the Value field, without the tag and length.
        """
        raise NotImplementedError("encode method must be implemented.")

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.tag == other.tag and self.value == other.value  # type: ignore

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.tag, self.value))

    def __repr__(self) -> str:
        return "{0}(tag={1!r}, value={2!r})".format(type(self).__name__, self.tag, self.value)


class KnownValue(TlvValue):
    """
    The value of an optional parameter whose tag is one of :class:`Tag <smpptlv.tag.Tag>`.

    Usage:

    .. highlight:: python
    .. code-block:: python

        import smpptlv

        port = smpptlv.KnownValue(smpptlv.Tag.SOURCE_PORT, 8080)
        payload = smpptlv.KnownValue(smpptlv.Tag.MESSAGE_PAYLOAD, b"a very long message")
        alert = smpptlv.KnownValue(smpptlv.Tag.ALERT_ON_MESSAGE_DELIVERY)
    """

    def __init__(
        self, tag: TlvTag, value: typing.Union[None, int, str, bytes, bytearray] = None
    ) -> None:
        """
        Parameters:
            tag: a known tag.
            value: an `int` for integer shaped tags, a `str` for c-octet string shaped tags,
                   `bytes` for octet string shaped tags and `None` for tags without a value field.
        """
        self._validate_args(tag=tag, value=value)
        if isinstance(value, bytearray):
            value = bytes(value)
        super(KnownValue, self).__init__(tag=tag, value=value)

    @staticmethod
    def _validate_args(tag: TlvTag, value: typing.Union[None, int, str, bytes, bytearray]) -> None:
        if not isinstance(tag, TlvTag):
            raise ValueError("`tag` should be of type:: `TlvTag` You entered: {0}".format(type(tag)))
        if tag not in SHAPES:
            raise ValueError(
                "The tag `{0}` is not a recognised SMPP optional parameter tag.".format(tag)
            )

        shape = SHAPES[tag]
        if shape.kind == INT:
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(
                    "`{0}` should be of type:: `int` You entered: {1}".format(tag.name, type(value))
                )
            if value < 0 or value >= 2 ** (8 * shape.size):
                raise ValueError(
                    "`{0}` should fit in an unsigned int of {1} octet(s) You entered: {2}".format(
                        tag.name, shape.size, value
                    )
                )
        elif shape.kind == CSTRING:
            if not isinstance(value, str):
                raise ValueError(
                    "`{0}` should be of type:: `str` You entered: {1}".format(tag.name, type(value))
                )
            try:
                encoded = value.encode("ascii")
            except UnicodeEncodeError as e:
                raise ValueError(
                    "`{0}` should only contain ascii characters You entered: {1}".format(
                        tag.name, value
                    )
                ) from e
            if chr(0).encode("ascii") in encoded:
                raise ValueError("`{0}` should not contain a NULL character".format(tag.name))
            if len(encoded) + 1 > MAX_VALUE_LENGTH:
                raise ValueError(
                    "`{0}` should be at most {1} octets long".format(tag.name, MAX_VALUE_LENGTH - 1)
                )
        elif shape.kind == OCTETS:
            if not isinstance(value, (bytes, bytearray)):
                raise ValueError(
                    "`{0}` should be of type:: `bytes` You entered: {1}".format(tag.name, type(value))
                )
            if len(value) > MAX_VALUE_LENGTH:
                raise ValueError(
                    "`{0}` should be at most {1} octets long".format(tag.name, MAX_VALUE_LENGTH)
                )
        elif shape.kind == FLAG:
            if value is not None:
                raise ValueError(
                    "`{0}` has no value field and should be `None` You entered: {1}".format(
                        tag.name, type(value)
                    )
                )

    @property
    def shape(self) -> ValueShape:
        return SHAPES[self.tag]

    @property
    def length(self) -> int:
        shape = self.shape
        if shape.kind == INT:
            return shape.size
        elif shape.kind == CSTRING:
            # c-octet string so it is a series of null-terminated ASCII chars
            return len(self.value) + 1
        elif shape.kind == OCTETS:
            return len(self.value)
        else:
            return 0

    def encode(self) -> bytes:
        shape = self.shape
        if shape.kind == INT:
            return struct.pack(_INT_FORMATS[shape.size], self.value)
        elif shape.kind == CSTRING:
            return self.value.encode("ascii") + chr(0).encode("ascii")
        elif shape.kind == OCTETS:
            return self.value
        else:
            return b""

    @classmethod
    def decode(cls, tag: TlvTag, data: bytes) -> "KnownValue":
        """
        Builds the value of a known tag from the bytes of its Value field.
        It raises `ValueError` if the bytes do not fit the shape of the tag.

        Parameters:
            tag: a known tag.
            data: the Value field, without the tag and length.
        """
        shape = SHAPES.get(tag)
        if shape is None:
            raise ValueError(
                "The tag `{0}` is not a recognised SMPP optional parameter tag.".format(tag)
            )

        if shape.kind == INT:
            if len(data) != shape.size:
                raise ValueError(
                    "`{0}` should be {1} octet(s) long, got {2}".format(
                        tag.name, shape.size, len(data)
                    )
                )
            return cls(tag, struct.unpack(_INT_FORMATS[shape.size], data)[0])
        elif shape.kind == CSTRING:
            if not data.endswith(chr(0).encode("ascii")):
                raise ValueError("`{0}` should be NULL terminated".format(tag.name))
            try:
                text = data[:-1].decode("ascii")
            except UnicodeDecodeError as e:
                raise ValueError("`{0}` should only contain ascii characters".format(tag.name)) from e
            return cls(tag, text)
        elif shape.kind == OCTETS:
            return cls(tag, bytes(data))
        else:
            if data:
                raise ValueError("`{0}` should not have a value field".format(tag.name))
            return cls(tag)


class OtherValue(TlvValue):
    """
    Uninterpreted bytes carried under any tag.
    This is how vendor specific(custom) optional parameters and tags that smpptlv does not know are represented.
    """

    def __init__(self, tag: TlvTag, value: typing.Union[bytes, bytearray]) -> None:
        """
        Parameters:
            tag: the tag of the optional parameter.
            value: the raw bytes of the Value field.
        """
        if not isinstance(tag, TlvTag):
            raise ValueError("`tag` should be of type:: `TlvTag` You entered: {0}".format(type(tag)))
        if not isinstance(value, (bytes, bytearray)):
            raise ValueError(
                "`value` should be of type:: `bytes` You entered: {0}".format(type(value))
            )
        if len(value) > MAX_VALUE_LENGTH:
            raise ValueError("`value` should be at most {0} octets long".format(MAX_VALUE_LENGTH))
        super(OtherValue, self).__init__(tag=tag, value=bytes(value))

    @property
    def length(self) -> int:
        return len(self.value)

    def encode(self) -> bytes:
        return self.value
