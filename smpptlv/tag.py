import typing


VENDOR_TAG_MIN: int = 0x1400
VENDOR_TAG_MAX: int = 0x3FFF
MAX_TAG: int = 0xFFFF

OTHER: str = "other"


class TlvTag(typing.NamedTuple):
    """
    An SMPP optional parameter tag.

    The Tag field is used to uniquely identify the particular optional parameter in question.
    Tags that SMPP defines are available as attributes of :class:`Tag <Tag>`;
    any other numeric tag(eg a vendor specific one in the range 0x1400 - 0x3FFF) is represented
    by a tag whose name is `other`.

    Two tags are equal only if both their name and code are equal.
    Thus `TlvTag.other(0x0424)` is not equal to `Tag.MESSAGE_PAYLOAD` even though they share a code.
    """

    name: str
    code: int

    @classmethod
    def other(cls, code: int) -> "TlvTag":
        """
        Returns a tag carrying the given numeric code that is not interpreted as any known tag.

        Parameters:
            code: the numeric tag. unsigned 16bit integer.
        """
        if not isinstance(code, int) or isinstance(code, bool):
            raise ValueError("`code` should be of type:: `int` You entered: {0}".format(type(code)))
        if code < 0 or code > MAX_TAG:
            raise ValueError(
                "`code` should be in the range 0x0000 - 0xFFFF You entered: {0}".format(hex(code))
            )
        return cls(name=OTHER, code=code)

    @classmethod
    def from_code(cls, code: int) -> "TlvTag":
        """
        Returns the known tag with the given numeric code, or an `other` tag if there is none.

        Parameters:
            code: the numeric tag as found on the wire.
        """
        known = Tag.CODE_to_TAG.get(code)
        if known is not None:
            return known
        return cls.other(code)

    @property
    def is_known(self) -> bool:
        return self.name != OTHER

    @property
    def is_vendor(self) -> bool:
        """
        Whether the numeric code lies in the range reserved for vendor specific optional parameters.
        """
        return VENDOR_TAG_MIN <= self.code <= VENDOR_TAG_MAX


class Tag:
    """
    The SMPP optional parameter tags that smpptlv knows the value shape of.

    see section 5.3.2 of smpp ver 3.4 spec document and section 4.8.4 of smpp ver 5.0 spec document.
    All optional parameters have the following general TLV (Tag, Length, Value) format.
    Tag, Integer, 2octets
    Length, Integer, 2octets
    Value, type varies, size varies.
    """

    DEST_ADDR_SUBUNIT: TlvTag = TlvTag("dest_addr_subunit", 0x0005)
    DEST_NETWORK_TYPE: TlvTag = TlvTag("dest_network_type", 0x0006)
    DEST_BEARER_TYPE: TlvTag = TlvTag("dest_bearer_type", 0x0007)
    DEST_TELEMATICS_ID: TlvTag = TlvTag("dest_telematics_id", 0x0008)
    SOURCE_ADDR_SUBUNIT: TlvTag = TlvTag("source_addr_subunit", 0x000D)
    SOURCE_NETWORK_TYPE: TlvTag = TlvTag("source_network_type", 0x000E)
    SOURCE_BEARER_TYPE: TlvTag = TlvTag("source_bearer_type", 0x000F)
    SOURCE_TELEMATICS_ID: TlvTag = TlvTag("source_telematics_id", 0x0010)
    QOS_TIME_TO_LIVE: TlvTag = TlvTag("qos_time_to_live", 0x0017)
    PAYLOAD_TYPE: TlvTag = TlvTag("payload_type", 0x0019)
    ADDITIONAL_STATUS_INFO_TEXT: TlvTag = TlvTag("additional_status_info_text", 0x001D)
    RECEIPTED_MESSAGE_ID: TlvTag = TlvTag("receipted_message_id", 0x001E)
    MS_MSG_WAIT_FACILITIES: TlvTag = TlvTag("ms_msg_wait_facilities", 0x0030)
    PRIVACY_INDICATOR: TlvTag = TlvTag("privacy_indicator", 0x0201)
    SOURCE_SUBADDRESS: TlvTag = TlvTag("source_subaddress", 0x0202)
    DEST_SUBADDRESS: TlvTag = TlvTag("dest_subaddress", 0x0203)
    USER_MESSAGE_REFERENCE: TlvTag = TlvTag("user_message_reference", 0x0204)
    USER_RESPONSE_CODE: TlvTag = TlvTag("user_response_code", 0x0205)
    SOURCE_PORT: TlvTag = TlvTag("source_port", 0x020A)
    DESTINATION_PORT: TlvTag = TlvTag("destination_port", 0x020B)
    SAR_MSG_REF_NUM: TlvTag = TlvTag("sar_msg_ref_num", 0x020C)
    LANGUAGE_INDICATOR: TlvTag = TlvTag("language_indicator", 0x020D)
    SAR_TOTAL_SEGMENTS: TlvTag = TlvTag("sar_total_segments", 0x020E)
    SAR_SEGMENT_SEQNUM: TlvTag = TlvTag("sar_segment_seqnum", 0x020F)
    SC_INTERFACE_VERSION: TlvTag = TlvTag("sc_interface_version", 0x0210)
    CALLBACK_NUM_PRES_IND: TlvTag = TlvTag("callback_num_pres_ind", 0x0302)
    CALLBACK_NUM_ATAG: TlvTag = TlvTag("callback_num_atag", 0x0303)
    NUMBER_OF_MESSAGES: TlvTag = TlvTag("number_of_messages", 0x0304)
    CALLBACK_NUM: TlvTag = TlvTag("callback_num", 0x0381)
    DPF_RESULT: TlvTag = TlvTag("dpf_result", 0x0420)
    SET_DPF: TlvTag = TlvTag("set_dpf", 0x0421)
    MS_AVAILABILITY_STATUS: TlvTag = TlvTag("ms_availability_status", 0x0422)
    NETWORK_ERROR_CODE: TlvTag = TlvTag("network_error_code", 0x0423)
    MESSAGE_PAYLOAD: TlvTag = TlvTag("message_payload", 0x0424)
    DELIVERY_FAILURE_REASON: TlvTag = TlvTag("delivery_failure_reason", 0x0425)
    MORE_MESSAGES_TO_SEND: TlvTag = TlvTag("more_messages_to_send", 0x0426)
    MESSAGE_STATE: TlvTag = TlvTag("message_state", 0x0427)
    CONGESTION_STATE: TlvTag = TlvTag("congestion_state", 0x0428)
    USSD_SERVICE_OP: TlvTag = TlvTag("ussd_service_op", 0x0501)
    BROADCAST_CHANNEL_INDICATOR: TlvTag = TlvTag("broadcast_channel_indicator", 0x0600)
    BROADCAST_CONTENT_TYPE: TlvTag = TlvTag("broadcast_content_type", 0x0601)
    BROADCAST_CONTENT_TYPE_INFO: TlvTag = TlvTag("broadcast_content_type_info", 0x0602)
    BROADCAST_MESSAGE_CLASS: TlvTag = TlvTag("broadcast_message_class", 0x0603)
    BROADCAST_REP_NUM: TlvTag = TlvTag("broadcast_rep_num", 0x0604)
    BROADCAST_FREQUENCY_INTERVAL: TlvTag = TlvTag("broadcast_frequency_interval", 0x0605)
    BROADCAST_AREA_IDENTIFIER: TlvTag = TlvTag("broadcast_area_identifier", 0x0606)
    BROADCAST_ERROR_STATUS: TlvTag = TlvTag("broadcast_error_status", 0x0607)
    BROADCAST_AREA_SUCCESS: TlvTag = TlvTag("broadcast_area_success", 0x0608)
    BROADCAST_END_TIME: TlvTag = TlvTag("broadcast_end_time", 0x0609)
    BROADCAST_SERVICE_GROUP: TlvTag = TlvTag("broadcast_service_group", 0x060A)
    BILLING_IDENTIFICATION: TlvTag = TlvTag("billing_identification", 0x060B)
    SOURCE_NETWORK_ID: TlvTag = TlvTag("source_network_id", 0x060D)
    DEST_NETWORK_ID: TlvTag = TlvTag("dest_network_id", 0x060E)
    SOURCE_NODE_ID: TlvTag = TlvTag("source_node_id", 0x060F)
    DEST_NODE_ID: TlvTag = TlvTag("dest_node_id", 0x0610)
    DEST_ADDR_NP_RESOLUTION: TlvTag = TlvTag("dest_addr_np_resolution", 0x0611)
    DEST_ADDR_NP_INFORMATION: TlvTag = TlvTag("dest_addr_np_information", 0x0612)
    DEST_ADDR_NP_COUNTRY: TlvTag = TlvTag("dest_addr_np_country", 0x0613)
    DISPLAY_TIME: TlvTag = TlvTag("display_time", 0x1201)
    SMS_SIGNAL: TlvTag = TlvTag("sms_signal", 0x1203)
    MS_VALIDITY: TlvTag = TlvTag("ms_validity", 0x1204)
    ALERT_ON_MESSAGE_DELIVERY: TlvTag = TlvTag("alert_on_message_delivery", 0x130C)
    ITS_REPLY_TYPE: TlvTag = TlvTag("its_reply_type", 0x1380)
    ITS_SESSION_INFO: TlvTag = TlvTag("its_session_info", 0x1383)

    # filled in below, once the class body exists.
    NAME_to_TAG: typing.Dict[str, TlvTag] = {}
    CODE_to_TAG: typing.Dict[int, TlvTag] = {}


for _tag in list(vars(Tag).values()):
    if isinstance(_tag, TlvTag):
        Tag.NAME_to_TAG[_tag.name] = _tag
        Tag.CODE_to_TAG[_tag.code] = _tag
