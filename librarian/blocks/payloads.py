# librarian/blocks/payloads.py
"""Encoding of the values attached to buttons and select options.

Each action carries one small payload type. On the wire a payload is its
fields joined with "|" in declaration order, e.g. "9780345391803|The Hitchhiker's
Guide" for a borrow request. A literal "|" or "\\" inside a field is escaped
with a backslash, so values containing them still decode to the original.
"""
from typing import ClassVar, Dict, List, Optional, Type, Union

from pydantic import BaseModel, Field

from librarian.exceptions import PayloadDecodeError
from . import actions

DELIMITER = "|"
ESCAPE = "\\"


class ActionPayload(BaseModel):
    action_id: ClassVar[str]


class AddItemPayload(ActionPayload):
    action_id: ClassVar[str] = actions.COLLECTION_ADD_ITEM
    isbn: str
    title: str
    author_name: str
    cover_id: Optional[str] = None


class RemoveItemPayload(ActionPayload):
    action_id: ClassVar[str] = actions.COLLECTION_REMOVE_ITEM
    isbn: str


class BorrowPayload(ActionPayload):
    action_id: ClassVar[str] = actions.COLLECTION_ITEM_FIND_LENDERS
    isbn: str
    title: str


class RatingPayload(ActionPayload):
    action_id: ClassVar[str] = actions.COLLECTION_ITEM_UPDATE_RATING
    isbn: str
    rating: int = Field(ge=0, le=5)


class LendOutPayload(ActionPayload):
    action_id: ClassVar[str] = actions.COLLECTION_ITEM_UPDATE_LEND_OUT
    isbn: str
    lend_out: bool


class OwnersPayload(ActionPayload):
    action_id: ClassVar[str] = actions.COLLECTION_ITEM_FIND_OTHER_RATINGS
    isbn: str
    title: str
    user_owns_it: bool


Payload = Union[
    AddItemPayload, RemoveItemPayload, BorrowPayload,
    RatingPayload, LendOutPayload, OwnersPayload,
]

PAYLOAD_TYPES: Dict[str, Type[ActionPayload]] = {
    payload_type.action_id: payload_type
    for payload_type in (
        AddItemPayload, RemoveItemPayload, BorrowPayload,
        RatingPayload, LendOutPayload, OwnersPayload,
    )
}


def _escape(value: str) -> str:
    return value.replace(ESCAPE, ESCAPE * 2).replace(DELIMITER, ESCAPE + DELIMITER)


def _split(raw: str) -> List[str]:
    """Split on unescaped delimiters, undoing the escaping.

    Raises:
        ValueError: On a dangling or unknown escape sequence
    """
    fields = []
    current = []
    chars = iter(raw)
    for char in chars:
        if char == ESCAPE:
            escaped = next(chars, None)
            if escaped not in (ESCAPE, DELIMITER):
                raise ValueError(f"invalid escape sequence at {''.join(current)!r}")
            current.append(escaped)
        elif char == DELIMITER:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
    fields.append("".join(current))
    return fields


def _to_wire(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return _escape(str(value))


def _from_wire(raw: str, annotation):
    if annotation is bool:
        if raw not in ("true", "false"):
            raise ValueError(f"expected 'true' or 'false', got {raw!r}")
        return raw == "true"
    if annotation is int:
        return int(raw)
    if annotation == Optional[str]:
        return raw or None
    return raw


def encode_payload(payload: ActionPayload) -> str:
    """Serialize a payload to the string stored in a button or option value."""
    return DELIMITER.join(
        _to_wire(getattr(payload, name)) for name in type(payload).model_fields
    )


def decode_payload(action_id: str, raw: Optional[str]) -> Payload:
    """Parse the value of an interaction back into its payload.

    Args:
        action_id: Action id of the interaction, selects the payload type
        raw: The button or option value

    Raises:
        PayloadDecodeError: If the value does not fit the payload type
    """
    payload_type = PAYLOAD_TYPES.get(action_id)
    if payload_type is None:
        raise PayloadDecodeError(action_id, raw or "", "no payload defined for this action")
    if raw is None:
        raise PayloadDecodeError(action_id, "", "missing value")

    model_fields = payload_type.model_fields
    try:
        values = _split(raw)
        if len(values) != len(model_fields):
            raise ValueError(f"expected {len(model_fields)} fields, got {len(values)}")
        return payload_type(**{
            name: _from_wire(value, field.annotation)
            for (name, field), value in zip(model_fields.items(), values)
        })
    except ValueError as e:
        # pydantic's ValidationError is a ValueError too
        raise PayloadDecodeError(action_id, raw, str(e)) from e
