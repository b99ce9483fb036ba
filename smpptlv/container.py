import abc
import typing

from .tag import TlvTag
from .tlv import Tlv
from .value import TlvValue


class TlvContainer(abc.ABC):
    """
    Interface for PDUs that carry optional parameters.
    It provides a uniform API for adding, removing and querying TLVs across the different PDU types.

    User implementations should inherit this class and implement the
    :func:`get_tlvs_mut <TlvContainer.get_tlvs_mut>` method with the type signature shown.
    PDUs whose fixed body has to react to a newly added TLV override :func:`on_tlv_insert <TlvContainer.on_tlv_insert>`.

    TLVs are kept in the order in which they were added. Tags are not required to be unique;
    lookups return the first TLV with a matching tag.

    Usage:

    .. highlight:: python
    .. code-block:: python

        import smpptlv

        submit_sm = smpptlv.SubmitSm(source_addr="254722111111", destination_addr="254722999999")
        submit_sm.push_tlv_raw(smpptlv.Tlv.new_custom(0x1400, b"\\x01\\x02\\x03\\x04"))
        submit_sm.has_tlv(smpptlv.TlvTag.other(0x1400))  # True
    """

    @abc.abstractmethod
    def get_tlvs_mut(self) -> typing.List[Tlv]:
        """
        Returns the list that holds the TLVs of this PDU.
        Mutating it mutates the PDU.
        """
        raise NotImplementedError("get_tlvs_mut method must be implemented.")

    def on_tlv_insert(self, tag: TlvTag) -> None:
        """
        called after a TLV has been added to this PDU.
        The default implementation does nothing.

        Parameters:
            tag: the tag of the TLV that was added.
        """
        return None

    def push_tlv_raw(self, tlv: Tlv) -> None:
        """
        Adds a TLV to the end of this PDU's optional parameters.
        Any TLV can be added, including custom ones with vendor-specific tags (0x1400-0x3FFF).

        Parameters:
            tlv: the TLV to add.
        """
        self.get_tlvs_mut().append(tlv)
        self.on_tlv_insert(tlv.tag)

    def push_tlv(self, value: TlvValue) -> None:
        """
        Wraps the given value in a TLV and adds it to this PDU.

        Parameters:
            value: the value of the optional parameter.
        """
        self.push_tlv_raw(Tlv.new(value))

    def get_tlv(self, tag: TlvTag) -> typing.Union[None, Tlv]:
        """
        Returns the first TLV with the given tag, or `None`.
        """
        for tlv in self.get_tlvs_mut():
            if tlv.tag == tag:
                return tlv
        return None

    def get_tlvs(self) -> typing.Tuple[Tlv, ...]:
        """
        Returns all the TLVs of this PDU, in the order in which they were added.
        """
        return tuple(self.get_tlvs_mut())

    def remove_tlv(self, tag: TlvTag) -> typing.Union[None, Tlv]:
        """
        Removes the first TLV with the given tag and returns it, or returns `None` if there is no such TLV.

        Removing a TLV does not undo what :func:`on_tlv_insert <TlvContainer.on_tlv_insert>` did when it was added.
        """
        tlvs = self.get_tlvs_mut()
        for position, tlv in enumerate(tlvs):
            if tlv.tag == tag:
                return tlvs.pop(position)
        return None

    def has_tlv(self, tag: TlvTag) -> bool:
        return self.get_tlv(tag) is not None

    def clear_tlvs(self) -> None:
        """
        Removes all TLVs. Fields that were changed when the TLVs were added are not restored.
        """
        self.get_tlvs_mut().clear()
