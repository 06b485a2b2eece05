# librarian/blocks/views.py
from typing import Sequence

from .types import Block, PlainText, View

MODAL_TITLE_LIMIT = 24

POTENTIAL_LENDERS_TITLE = "Potential lenders"
OTHER_OWNERS_TITLE = "Other owners in the team"
TEAMMATE_COLLECTION_TITLE = "Your teammate's books"


def home_view(blocks: Sequence[Block]) -> View:
    return View(type="home", blocks=list(blocks))


def modal_view(title: str, blocks: Sequence[Block]) -> View:
    return View(
        type="modal",
        title=PlainText(text=title[:MODAL_TITLE_LIMIT]),
        close=PlainText(text="Back"),
        blocks=list(blocks)
    )
