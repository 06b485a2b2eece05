# librarian/blocks/types.py
"""Typed Slack Block Kit elements.

Only the subset of Block Kit the bot renders is modelled. Field limits
follow https://api.slack.com/reference/block-kit/blocks so that a bad view
fails while it is built instead of being rejected by Slack.
"""
from typing import Any, Dict, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, Field

HEADER_TEXT_LIMIT = 150
SECTION_FIELDS_LIMIT = 10
ACTIONS_ELEMENTS_LIMIT = 25
BUTTON_VALUE_LIMIT = 2000
OPTION_VALUE_LIMIT = 150


class PlainText(BaseModel):
    type: Literal["plain_text"] = "plain_text"
    text: str
    emoji: Optional[bool] = True


class Markdown(BaseModel):
    type: Literal["mrkdwn"] = "mrkdwn"
    text: str


TextObject = Union[PlainText, Markdown]


class Option(BaseModel):
    text: PlainText
    value: str = Field(max_length=OPTION_VALUE_LIMIT)


class Button(BaseModel):
    type: Literal["button"] = "button"
    text: PlainText
    action_id: str
    value: Optional[str] = Field(default=None, max_length=BUTTON_VALUE_LIMIT)
    style: Optional[Literal["primary", "danger"]] = None


class StaticSelect(BaseModel):
    type: Literal["static_select"] = "static_select"
    placeholder: PlainText
    options: List[Option] = Field(min_length=1, max_length=100)
    action_id: str


class UsersSelect(BaseModel):
    type: Literal["users_select"] = "users_select"
    placeholder: PlainText
    action_id: str


class PlainTextInput(BaseModel):
    type: Literal["plain_text_input"] = "plain_text_input"
    action_id: str


class Image(BaseModel):
    type: Literal["image"] = "image"
    image_url: str
    alt_text: str


class SectionBlock(BaseModel):
    type: Literal["section"] = "section"
    block_id: Optional[str] = None
    text: Optional[TextObject] = None
    fields: Optional[List[TextObject]] = Field(default=None, max_length=SECTION_FIELDS_LIMIT)
    accessory: Optional[Union[Button, Image, StaticSelect]] = None


class DividerBlock(BaseModel):
    type: Literal["divider"] = "divider"


class ActionsBlock(BaseModel):
    type: Literal["actions"] = "actions"
    elements: List[Union[Button, StaticSelect]] = Field(min_length=1, max_length=ACTIONS_ELEMENTS_LIMIT)


class InputBlock(BaseModel):
    type: Literal["input"] = "input"
    label: PlainText
    element: Union[PlainTextInput, UsersSelect]
    dispatch_action: bool = False


class HeaderBlock(BaseModel):
    type: Literal["header"] = "header"
    text: PlainText


Block = Union[SectionBlock, DividerBlock, ActionsBlock, InputBlock, HeaderBlock]


class View(BaseModel):
    """A home tab or modal view"""
    type: Literal["home", "modal"]
    blocks: List[Block] = []
    title: Optional[PlainText] = None
    close: Optional[PlainText] = None

    def to_slack(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


def to_slack(blocks: Sequence[Block]) -> List[Dict[str, Any]]:
    """Serialize blocks to Block Kit dicts, leaving out unset fields."""
    return [block.model_dump(exclude_none=True) for block in blocks]
