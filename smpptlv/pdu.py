import abc
import logging
import typing

from . import log
from .container import TlvContainer
from .tag import Tag, TlvTag
from .tlv import Tlv


MAX_SHORT_MESSAGE_LENGTH: int = 254


class SmppCommand:
    """
    Represents the SMPP commands whose PDUs carry optional parameters in smpptlv.
    """

    # see section 4 of SMPP spec document v3.4
    SUBMIT_SM: str = "submit_sm"
    DELIVER_SM: str = "deliver_sm"
    DATA_SM: str = "data_sm"


class PduError(Exception):
    """
    Error raised when there's an error instantiating a PDU.
    It carries the list of all the problems found with the arguments.
    """

    pass


class Pdu(TlvContainer):
    """
    Base class of the PDUs that can carry optional parameters.
    The TLVs are owned by the PDU; they are created empty with it and are only changed through
    the :class:`TlvContainer <smpptlv.container.TlvContainer>` methods.

    Concrete PDUs set `smpp_command` as a class attribute and validate their own arguments
    before calling `Pdu.__init__`.
    """

    @property
    @abc.abstractmethod
    def smpp_command(self) -> str:
        """
        the name of the SMPP command of this PDU, eg `submit_sm`
        """
        raise NotImplementedError("smpp_command must be implemented.")

    def __init__(
        self,
        tlvs: typing.Union[None, typing.List[Tlv]] = None,
        logger: typing.Union[None, log.BaseLogger] = None,
        loglevel: str = "INFO",
        log_metadata: typing.Union[None, dict] = None,
    ) -> None:
        if log_metadata is None:
            log_metadata = {}
        self.log_metadata = {**log_metadata, "smpp_command": self.smpp_command}
        self.loglevel = loglevel.upper()

        if logger is not None:
            self.logger = logger
        else:
            self.logger = log.SimpleLogger("smpptlv.pdu")
        self.logger.bind(level=self.loglevel, log_metadata=self.log_metadata)

        self.tlvs: typing.List[Tlv] = []
        for tlv in tlvs or []:
            self.push_tlv_raw(tlv)

    def get_tlvs_mut(self) -> typing.List[Tlv]:
        return self.tlvs

    def _log(self, level: int, log_data: dict) -> None:
        # if the supplied logger is unable to log; we move on
        try:
            self.logger.log(level, log_data)
        except Exception:
            pass

    @staticmethod
    def _validate_common_args(
        tlvs: typing.Union[None, typing.List[Tlv]],
        logger: typing.Union[None, log.BaseLogger],
        loglevel: str,
        log_metadata: typing.Union[None, dict],
    ) -> typing.List[ValueError]:
        errors: typing.List[ValueError] = []
        if not isinstance(tlvs, (type(None), list)):
            errors.append(
                ValueError(
                    "`tlvs` should be of type:: `None` or `list` You entered: {0}".format(type(tlvs))
                )
            )
        elif tlvs is not None:
            for tlv in tlvs:
                if not isinstance(tlv, Tlv):
                    errors.append(
                        ValueError(
                            "`tlvs` should only contain items of type:: `smpptlv.Tlv` You entered: {0}".format(
                                type(tlv)
                            )
                        )
                    )
        if not isinstance(logger, (type(None), log.BaseLogger)):
            errors.append(
                ValueError(
                    "`logger` should be of type:: `None` or `smpptlv.log.BaseLogger` You entered: {0}".format(
                        type(logger)
                    )
                )
            )
        if not isinstance(loglevel, str):
            errors.append(
                ValueError(
                    "`loglevel` should be of type:: `str` You entered: {0}".format(type(loglevel))
                )
            )
        elif loglevel.upper() not in ["NOTSET", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            errors.append(
                ValueError(
                    """`loglevel` should be one of; 'NOTSET', 'DEBUG', 'INFO', 'WARNING', 'ERROR' or 'CRITICAL'. You entered: {0}""".format(
                        loglevel
                    )
                )
            )
        if not isinstance(log_metadata, (type(None), dict)):
            errors.append(
                ValueError(
                    "`log_metadata` should be of type:: `None` or `dict` You entered: {0}".format(
                        type(log_metadata)
                    )
                )
            )
        return errors

    @staticmethod
    def _validate_fields(
        c_octet_strings: typing.Dict[str, typing.Any], integers: typing.Dict[str, typing.Any]
    ) -> typing.List[ValueError]:
        errors: typing.List[ValueError] = []
        for name, value in c_octet_strings.items():
            if not isinstance(value, str):
                errors.append(
                    ValueError(
                        "`{0}` should be of type:: `str` You entered: {1}".format(name, type(value))
                    )
                )
        for name, value in integers.items():
            # all these are unsigned Int, 1octet
            if not isinstance(value, int) or isinstance(value, bool):
                errors.append(
                    ValueError(
                        "`{0}` should be of type:: `int` You entered: {1}".format(name, type(value))
                    )
                )
            elif value < 0 or value > 0xFF:
                errors.append(
                    ValueError(
                        "`{0}` should be in the range 0x00 - 0xFF You entered: {1}".format(
                            name, value
                        )
                    )
                )
        return errors


class ShortMessagePdu(Pdu):
    """
    A PDU whose fixed body carries a `short_message` field.

    `short_message` and the `message_payload` optional parameter are alternative carriers of the message content;
    SMPP allows only one of them to be used at a time. Thus while a `message_payload` TLV is present, every TLV insert
    clears `short_message`.
    Removing that TLV afterwards does NOT bring the old `short_message` back.
    """

    def __init__(
        self,
        source_addr: str,
        destination_addr: str,
        short_message: bytes = b"",
        service_type: str = "",
        source_addr_ton: int = 0x00,
        source_addr_npi: int = 0x00,
        dest_addr_ton: int = 0x00,
        dest_addr_npi: int = 0x00,
        esm_class: int = 0x00,
        protocol_id: int = 0x00,
        priority_flag: int = 0x00,
        schedule_delivery_time: str = "",
        validity_period: str = "",
        registered_delivery: int = 0x00,
        replace_if_present_flag: int = 0x00,
        data_coding: int = 0x00,
        sm_default_msg_id: int = 0x00,
        tlvs: typing.Union[None, typing.List[Tlv]] = None,
        logger: typing.Union[None, log.BaseLogger] = None,
        loglevel: str = "INFO",
        log_metadata: typing.Union[None, dict] = None,
    ) -> None:
        """
        Parameters:
            source_addr: the identifier(eg msisdn) of the message sender
            destination_addr: the identifier(eg msisdn) of the message recipient
            short_message: up to 254 octets of user data. Applications which need to send longer messages should use
                           the `message_payload` optional parameter instead.
            service_type: Indicates the SMS Application service associated with the message
            source_addr_ton: Type of Number of message originator.
            source_addr_npi: Numbering Plan Identity of message originator.
            dest_addr_ton: Type of Number for destination.
            dest_addr_npi: Numbering Plan Identity of destination
            esm_class: Indicates Message Mode & Message Type.
            protocol_id: Protocol Identifier. Network specific field.
            priority_flag: Designates the priority level of the message.
            schedule_delivery_time: The short message is to be scheduled by the SMSC for delivery.
            validity_period: The validity period of this message.
            registered_delivery: Indicator to signify if an SMSC delivery receipt or an SME acknowledgement is required.
            replace_if_present_flag: Flag indicating if submitted message should replace an existing message.
            data_coding: Defines the encoding scheme of the short message user data.
            sm_default_msg_id: Indicates the short message to send from a list of predefined (`canned`) short messages stored on the SMSC
            tlvs: optional parameters to add to the PDU, in order.
            logger: an instance of `smpptlv.log.BaseLogger` to be used for logging
            loglevel: the level at which to log
            log_metadata: metadata that will be included in all log statements
        """
        errors = self._validate_common_args(
            tlvs=tlvs, logger=logger, loglevel=loglevel, log_metadata=log_metadata
        )
        errors.extend(
            self._validate_fields(
                c_octet_strings=dict(
                    source_addr=source_addr,
                    destination_addr=destination_addr,
                    service_type=service_type,
                    schedule_delivery_time=schedule_delivery_time,
                    validity_period=validity_period,
                ),
                integers=dict(
                    source_addr_ton=source_addr_ton,
                    source_addr_npi=source_addr_npi,
                    dest_addr_ton=dest_addr_ton,
                    dest_addr_npi=dest_addr_npi,
                    esm_class=esm_class,
                    protocol_id=protocol_id,
                    priority_flag=priority_flag,
                    registered_delivery=registered_delivery,
                    replace_if_present_flag=replace_if_present_flag,
                    data_coding=data_coding,
                    sm_default_msg_id=sm_default_msg_id,
                ),
            )
        )
        if not isinstance(short_message, (bytes, bytearray)):
            errors.append(
                ValueError(
                    "`short_message` should be of type:: `bytes` You entered: {0}".format(
                        type(short_message)
                    )
                )
            )
        elif len(short_message) > MAX_SHORT_MESSAGE_LENGTH:
            errors.append(
                ValueError(
                    "`short_message` should be at most {0} octets, use the `message_payload` TLV for longer messages. You entered: {1} octets".format(
                        MAX_SHORT_MESSAGE_LENGTH, len(short_message)
                    )
                )
            )
        if errors:
            raise PduError(errors)

        self.source_addr = source_addr
        self.destination_addr = destination_addr
        self.short_message = bytes(short_message)
        self.service_type = service_type
        self.source_addr_ton = source_addr_ton
        self.source_addr_npi = source_addr_npi
        self.dest_addr_ton = dest_addr_ton
        self.dest_addr_npi = dest_addr_npi
        self.esm_class = esm_class
        self.protocol_id = protocol_id
        self.priority_flag = priority_flag
        self.schedule_delivery_time = schedule_delivery_time
        self.validity_period = validity_period
        self.registered_delivery = registered_delivery
        self.replace_if_present_flag = replace_if_present_flag
        self.data_coding = data_coding
        self.sm_default_msg_id = sm_default_msg_id

        # TLVs go in last so that `on_tlv_insert` sees the fixed body.
        super(ShortMessagePdu, self).__init__(
            tlvs=tlvs, logger=logger, loglevel=loglevel, log_metadata=log_metadata
        )

    @property
    def sm_length(self) -> int:
        """
        Length in octets of the `short_message`. It is zero when the message is carried in `message_payload`.
        """
        return len(self.short_message)

    def on_tlv_insert(self, tag: TlvTag) -> None:
        # a `message_payload` anywhere in the TLVs means `short_message` is empty.
        if not self.short_message or not self.has_tlv(Tag.MESSAGE_PAYLOAD):
            return

        self._log(
            logging.DEBUG,
            {
                "event": "smpptlv.{0}.on_tlv_insert".format(type(self).__name__),
                "stage": "end",
                "state": "message_payload present; clearing short_message",
                "cleared_sm_length": self.sm_length,
            },
        )
        self.short_message = b""


class SubmitSm(ShortMessagePdu):
    """
    The `submit_sm` PDU. It is used by an ESME to submit a short message to the SMSC.

    Usage:

    .. highlight:: python
    .. code-block:: python

        import smpptlv

        submit_sm = smpptlv.SubmitSm(
            source_addr="255700111222",
            destination_addr="255799000888",
            short_message=b"hello world",
        )
        submit_sm.push_tlv(smpptlv.KnownValue(smpptlv.Tag.MESSAGE_PAYLOAD, b"a much longer hello world"))
        submit_sm.short_message  # b""
    """

    smpp_command: str = SmppCommand.SUBMIT_SM


class DeliverSm(ShortMessagePdu):
    """
    The `deliver_sm` PDU. It is issued by the SMSC to send a message to an ESME.
    """

    smpp_command: str = SmppCommand.DELIVER_SM


class DataSm(Pdu):
    """
    The `data_sm` PDU. It has no `short_message` field; message content is always carried in
    the `message_payload` optional parameter.
    """

    smpp_command: str = SmppCommand.DATA_SM

    def __init__(
        self,
        source_addr: str,
        destination_addr: str,
        service_type: str = "",
        source_addr_ton: int = 0x00,
        source_addr_npi: int = 0x00,
        dest_addr_ton: int = 0x00,
        dest_addr_npi: int = 0x00,
        esm_class: int = 0x00,
        registered_delivery: int = 0x00,
        data_coding: int = 0x00,
        tlvs: typing.Union[None, typing.List[Tlv]] = None,
        logger: typing.Union[None, log.BaseLogger] = None,
        loglevel: str = "INFO",
        log_metadata: typing.Union[None, dict] = None,
    ) -> None:
        errors = self._validate_common_args(
            tlvs=tlvs, logger=logger, loglevel=loglevel, log_metadata=log_metadata
        )
        errors.extend(
            self._validate_fields(
                c_octet_strings=dict(
                    source_addr=source_addr,
                    destination_addr=destination_addr,
                    service_type=service_type,
                ),
                integers=dict(
                    source_addr_ton=source_addr_ton,
                    source_addr_npi=source_addr_npi,
                    dest_addr_ton=dest_addr_ton,
                    dest_addr_npi=dest_addr_npi,
                    esm_class=esm_class,
                    registered_delivery=registered_delivery,
                    data_coding=data_coding,
                ),
            )
        )
        if errors:
            raise PduError(errors)

        self.source_addr = source_addr
        self.destination_addr = destination_addr
        self.service_type = service_type
        self.source_addr_ton = source_addr_ton
        self.source_addr_npi = source_addr_npi
        self.dest_addr_ton = dest_addr_ton
        self.dest_addr_npi = dest_addr_npi
        self.esm_class = esm_class
        self.registered_delivery = registered_delivery
        self.data_coding = data_coding

        super(DataSm, self).__init__(
            tlvs=tlvs, logger=logger, loglevel=loglevel, log_metadata=log_metadata
        )
