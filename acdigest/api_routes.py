"""
API routes for AC Digest.
Exposes the bot commands: channel setup, roster management and manual runs.
"""

import logging

from fastapi import APIRouter, Depends, Request

from .errors import ValidationError, success_response
from .scheduler import DigestRunner
from .schemas import ChannelRequest, ConfigResponse, RegisterRequest, RunResponse
from .store import ConfigStore
from .validation import split_user_list, validate_channel_id, validate_user_id

logger = logging.getLogger(__name__)

# Create router instance
router = APIRouter()


def get_store(request: Request) -> ConfigStore:
    """Config store owned by the application."""
    return request.app.state.store


def get_runner(request: Request) -> DigestRunner:
    """Digest runner owned by the application."""
    return request.app.state.runner


@router.post("/channel")
def set_channel(body: ChannelRequest, store: ConfigStore = Depends(get_store)):
    """
    Set the channel that digests are sent to.

    Args:
        body: Channel id of the destination
        store: Config store (injected)
    """
    is_valid, error = validate_channel_id(body.channel_id)
    if not is_valid:
        raise ValidationError(error)

    channel = body.channel_id.strip()
    store.set_channel(channel)
    return success_response({"channel": channel}, f"Channel set to {channel}.")


@router.post("/users")
def register_users(body: RegisterRequest, store: ConfigStore = Depends(get_store)):
    """
    Register AtCoder users. Several users may be given, comma separated.

    Args:
        body: Comma-separated user ids
        store: Config store (injected)

    Raises:
        ValidationError: No user given or an id is malformed
    """
    users = split_user_list(body.users)
    if not users:
        raise ValidationError("No user ids given")

    for user in users:
        is_valid, error = validate_user_id(user)
        if not is_valid:
            raise ValidationError(f"Invalid user id '{user}'", error)

    registered = store.register_users(users)
    return success_response(
        {"registered": registered},
        f"Registered users ({', '.join(registered)})."
    )


@router.delete("/users/{name}")
def unregister_user(name: str, store: ConfigStore = Depends(get_store)):
    """Unregister an AtCoder user. Unknown users are not an error."""
    was_registered = store.unregister_user(name)
    return success_response(
        {"user": name.strip(), "was_registered": was_registered},
        f"Unregistered user ({name.strip()})."
    )


@router.get("/users", response_model=ConfigResponse)
def list_users(store: ConfigStore = Depends(get_store)):
    """List registered users, sorted."""
    config = store.snapshot()
    return ConfigResponse(channel=config.channel, users=sorted(config.users))


@router.post("/run", response_model=RunResponse)
def run_now(runner: DigestRunner = Depends(get_runner)):
    """
    Run the digest immediately.

    Errors (not configured, upstream failure, run in progress) propagate to
    the application's APIError handler.
    """
    logger.info("Manual digest run requested")
    report = runner.run()
    return RunResponse(
        message="Done!",
        accounts=report.accounts,
        problems=report.problems,
        pages=report.pages,
    )
