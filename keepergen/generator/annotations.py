"""Index option lookup on message options.

The index option is a custom ``MessageOptions`` extension declared by the
user's schema, so the plugin's descriptor pool does not know it. protoc
hands it over as an unknown field. Two readers are provided:

- ``extract_index`` decodes the serialized options directly from the
  protobuf wire format. The generator uses this one.
- ``parse_index`` scans a compact text rendering of the options
  (``53535:"creator" 7:true``), one ``<fieldNumber>:<value>`` token per
  field. Kept for tooling that only has the text form.

Both return ``(index_field, found)`` and stop at the first occurrence of
the index field number.
"""

import re

from google.protobuf.message import Message

from .errors import MalformedAnnotation

INDEX_FIELD_NUMBER = 53535

_FIELD_NUMBER = re.compile(r"[0-9]+")

# Wire types
_VARINT = 0
_FIXED64 = 1
_LENGTH_DELIMITED = 2
_START_GROUP = 3
_END_GROUP = 4
_FIXED32 = 5

_MAX_VARINT_BYTES = 10


def parse_index(options_text: str) -> tuple[str, bool]:
    """Search a text rendering of message options for the index field."""
    for option in options_text.split():
        field_and_value = option.split(":")
        if len(field_and_value) != 2:
            raise MalformedAnnotation(f"incorrect option: {option}")

        field, value = field_and_value
        if not _FIELD_NUMBER.fullmatch(field):
            raise MalformedAnnotation(f"incorrect field number: {field}")

        if int(field) == INDEX_FIELD_NUMBER:
            if len(value) < 3 or value[0] != '"' or value[-1] != '"':
                raise MalformedAnnotation(f"incorrect index: {value}")
            return value[1:-1], True

    return "", False


def extract_index(options: Message) -> tuple[str, bool]:
    """Read the index field from the wire encoding of an options message."""
    return _scan(options.SerializeToString())


def _scan(data: bytes) -> tuple[str, bool]:
    pos = 0
    while pos < len(data):
        field_number, wire_type, pos = _read_tag(data, pos)

        if field_number == INDEX_FIELD_NUMBER:
            if wire_type != _LENGTH_DELIMITED:
                raise MalformedAnnotation(
                    f"index option must be a string, got wire type {wire_type}"
                )
            raw, pos = _read_length_delimited(data, pos)
            if not raw:
                raise MalformedAnnotation("index option is empty")
            try:
                return raw.decode("utf-8"), True
            except UnicodeDecodeError as e:
                raise MalformedAnnotation(f"index option is not valid UTF-8: {e}") from e

        pos = _skip_field(data, pos, field_number, wire_type)

    return "", False


def _read_varint(data: bytes, pos: int) -> tuple[int, int]:
    result = 0
    for i in range(_MAX_VARINT_BYTES):
        if pos >= len(data):
            raise MalformedAnnotation("truncated varint in options")
        byte = data[pos]
        pos += 1
        result |= (byte & 0x7F) << (7 * i)
        if not byte & 0x80:
            return result, pos
    raise MalformedAnnotation("varint too long in options")


def _read_tag(data: bytes, pos: int) -> tuple[int, int, int]:
    tag, pos = _read_varint(data, pos)
    field_number, wire_type = tag >> 3, tag & 0x7
    if field_number == 0:
        raise MalformedAnnotation("invalid field number 0 in options")
    return field_number, wire_type, pos


def _read_length_delimited(data: bytes, pos: int) -> tuple[bytes, int]:
    length, pos = _read_varint(data, pos)
    end = pos + length
    if end > len(data):
        raise MalformedAnnotation("truncated length-delimited field in options")
    return data[pos:end], end


def _skip_field(data: bytes, pos: int, field_number: int, wire_type: int) -> int:
    if wire_type == _VARINT:
        _, pos = _read_varint(data, pos)
        return pos
    if wire_type == _LENGTH_DELIMITED:
        _, pos = _read_length_delimited(data, pos)
        return pos
    if wire_type in (_FIXED64, _FIXED32):
        end = pos + (8 if wire_type == _FIXED64 else 4)
        if end > len(data):
            raise MalformedAnnotation("truncated fixed-width field in options")
        return end
    if wire_type == _START_GROUP:
        while True:
            if pos >= len(data):
                raise MalformedAnnotation(f"unterminated group {field_number} in options")
            inner_number, inner_type, pos = _read_tag(data, pos)
            if inner_type == _END_GROUP:
                if inner_number != field_number:
                    raise MalformedAnnotation(f"mismatched end of group {field_number}")
                return pos
            pos = _skip_field(data, pos, inner_number, inner_type)
    raise MalformedAnnotation(f"invalid wire type {wire_type} in options")
