# ookdecode/__init__.py
from ookdecode.protocol import PacketType, classify, decode

__all__ = ["PacketType", "classify", "decode"]
