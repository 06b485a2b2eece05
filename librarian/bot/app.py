# librarian/bot/app.py
"""Slack Bolt wiring: one listener per action, plus the request error boundary."""
import logging
from typing import Any, Callable, Dict, Optional, Tuple

import sentry_sdk
from slack_bolt import App
from slack_bolt.adapter.socket_mode import SocketModeHandler

from librarian.blocks import actions
from librarian.blocks.builders import error_notice_block
from librarian.blocks.types import View, to_slack
from librarian.config import Settings
from librarian.exceptions import LibrarianError, PayloadDecodeError
from librarian.services import CollectionService
from . import handlers

logger = logging.getLogger(__name__)

ERROR_NOTICE_BLOCK_ID = "librarian_error_notice"
GENERIC_FAILURE = "Something went wrong while talking to the library. Please try again later."


def caller_ids(body: Dict[str, Any]) -> Tuple[str, str]:
    """Team and member id of whoever triggered an interaction."""
    user = body.get("user") or {}
    team_id = user.get("team_id") or (body.get("team") or {}).get("id") or body.get("team_id")
    return team_id, user.get("id")


def current_view(body: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """The view the interaction came from, as it can be sent back to Slack."""
    view = body.get("view")
    if not view:
        return None
    return {"type": view.get("type", "home"), "blocks": list(view.get("blocks") or [])}


def with_error_notice(view: Optional[Dict[str, Any]], message: str = GENERIC_FAILURE) -> Dict[str, Any]:
    """Put a failure notice on top of a view, replacing an earlier notice."""
    notice = error_notice_block(message)
    notice.block_id = ERROR_NOTICE_BLOCK_ID
    if view is None:
        view = {"type": "home", "blocks": []}
    blocks = [block for block in view["blocks"] if block.get("block_id") != ERROR_NOTICE_BLOCK_ID]
    return {**view, "blocks": to_slack([notice]) + blocks}


def respond(
    render: Callable[[], View],
    deliver: Callable[[Dict[str, Any]], Any],
    restore: Callable[[Dict[str, Any]], Any],
    fallback: Optional[Dict[str, Any]]
) -> None:
    """Render a view and send it, or fall back to the last known-good view.

    Args:
        render: Builds the next view
        deliver: Sends the rendered view to Slack
        restore: Redisplays the fallback view when rendering failed
        fallback: The view the user was looking at, None if there is none
    """
    try:
        view = render()
    except PayloadDecodeError as e:
        logger.warning(f"Ignoring interaction: {e}")
        if fallback is not None:
            restore(fallback)
        return
    except LibrarianError:
        logger.exception("Interaction failed")
        restore(with_error_notice(fallback))
        return
    except Exception as e:
        logger.exception("Unexpected error while handling an interaction")
        sentry_sdk.capture_exception(e)
        restore(with_error_notice(fallback))
        return
    deliver(view.to_slack())


def _update_current(client, body: Dict[str, Any]) -> Callable[[Dict[str, Any]], Any]:
    def update(view: Dict[str, Any]):
        return client.views_update(view_id=body["view"]["id"], hash=body["view"].get("hash"), view=view)
    return update


def _open_modal(client, body: Dict[str, Any]) -> Callable[[Dict[str, Any]], Any]:
    def open_modal(view: Dict[str, Any]):
        return client.views_open(trigger_id=body["trigger_id"], view=view)
    return open_modal


def sentry_transaction(body, payload, next):
    """Bolt middleware running every request inside a Sentry transaction."""
    name = (payload or {}).get("action_id") or body.get("type") or "unknown"
    with sentry_sdk.start_transaction(op="Incoming request", name=name):
        next()


def register_listeners(app: App, service: CollectionService) -> None:
    """Attach the collection handlers to a Bolt app."""

    @app.event("app_home_opened")
    def app_home_opened(event, body, client):
        if event.get("tab", "home") != "home":
            return
        team_id = body.get("team_id")
        member_id = event["user"]

        def publish(view: Dict[str, Any]):
            return client.views_publish(user_id=member_id, view=view)

        respond(lambda: handlers.build_home(service, team_id, member_id), publish, publish, None)

    def update_home(handler: Callable[..., View], value_of: Callable[[Dict[str, Any]], Optional[str]]):
        def listener(ack, body, action, client):
            ack()
            team_id, member_id = caller_ids(body)
            update = _update_current(client, body)
            respond(
                lambda: handler(service, team_id, member_id, value_of(action)),
                update, update, current_view(body)
            )
        return listener

    def open_modal(handler: Callable[..., View]):
        def listener(ack, body, action, client):
            ack()
            team_id, member_id = caller_ids(body)
            respond(
                lambda: handler(service, team_id, member_id, action.get("value")),
                _open_modal(client, body), _update_current(client, body), current_view(body)
            )
        return listener

    def button_value(action):
        return action.get("value")

    def selected_value(action):
        return (action.get("selected_option") or {}).get("value")

    app.action(actions.BOOK_SEARCH_SUBMIT)(update_home(handlers.handle_search, button_value))
    app.action(actions.COLLECTION_ADD_ITEM)(update_home(handlers.handle_add, button_value))
    app.action(actions.COLLECTION_REMOVE_ITEM)(update_home(handlers.handle_remove, button_value))
    app.action(actions.COLLECTION_ITEM_UPDATE_RATING)(update_home(handlers.handle_rating, selected_value))
    app.action(actions.COLLECTION_ITEM_UPDATE_LEND_OUT)(update_home(handlers.handle_lend_out, selected_value))
    app.action(actions.COLLECTION_ITEM_FIND_LENDERS)(open_modal(handlers.handle_find_lenders))
    app.action(actions.COLLECTION_ITEM_FIND_OTHER_RATINGS)(open_modal(handlers.handle_find_owners))

    @app.action(actions.SHOW_HOME)
    def show_home(ack, body, client):
        ack()
        team_id, member_id = caller_ids(body)
        update = _update_current(client, body)
        respond(lambda: handlers.build_home(service, team_id, member_id), update, update, current_view(body))

    @app.action(actions.OTHER_USERS_COLLECTION)
    def other_users_collection(ack, body, action, client):
        ack()
        selected = action.get("selected_user")
        if not selected:
            return
        team_id, _ = caller_ids(body)
        respond(
            lambda: handlers.handle_member_collection(service, team_id, selected),
            _open_modal(client, body), _update_current(client, body), current_view(body)
        )


def create_app(settings: Settings, service: CollectionService) -> App:
    """Build the Bolt app with all listeners registered."""
    app = App(token=settings.slack_bot_token, signing_secret=settings.slack_signing_secret)
    app.use(sentry_transaction)
    register_listeners(app, service)
    return app


def run_socket_mode(settings: Settings, service: CollectionService) -> None:
    """Connect to Slack over Socket Mode and block until interrupted."""
    settings.require_slack_credentials()
    app = create_app(settings, service)
    logger.info("⚡️ The floating librarian is floating again!")
    SocketModeHandler(app, settings.slack_app_token).start()
