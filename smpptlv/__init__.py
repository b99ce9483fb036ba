from . import log  # noqa: F401
from . import tag  # noqa: F401
from . import value  # noqa: F401
from . import tlv  # noqa: F401
from . import container  # noqa: F401
from . import pdu  # noqa: F401
from . import codec  # noqa: F401

from .tag import Tag, TlvTag  # noqa: F401
from .value import TlvValue, KnownValue, OtherValue  # noqa: F401
from .tlv import Tlv  # noqa: F401
from .container import TlvContainer  # noqa: F401
from .pdu import (  # noqa: F401
    Pdu,
    DataSm,
    PduError,
    SubmitSm,
    DeliverSm,
    SmppCommand,
)
from .codec import BaseTlvCodec, SimpleTlvCodec, TlvDecodeError  # noqa: F401

from . import __version__  # noqa: F401
