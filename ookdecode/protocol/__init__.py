# protocol/__init__.py

from .defs import PacketType
from .dispatch import DecodeResult, classify, decode
from .acurite import decode_tower
from .fineoffset import decode_wh45, decode_ws80

__all__ = [
    "PacketType", "DecodeResult",
    "classify", "decode",
    "decode_tower", "decode_ws80", "decode_wh45",
]
