from .codec import decode, encode, build_request, new_request_id, encode_envelope, envelope_to_dict
from .messages import payload_room_id, parse_live_message, parse_history_items

__all__ = [
    "build_request",
    "decode",
    "encode",
    "encode_envelope",
    "envelope_to_dict",
    "new_request_id",
    "parse_history_items",
    "parse_live_message",
    "payload_room_id",
]
