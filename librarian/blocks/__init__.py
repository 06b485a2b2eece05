# librarian/blocks/__init__.py
from .types import View, to_slack
from .payloads import decode_payload, encode_payload

__all__ = ['View', 'to_slack', 'decode_payload', 'encode_payload']
