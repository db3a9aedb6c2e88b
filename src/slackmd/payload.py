"""chat.postMessage payload assembly.

Turns user markdown into the keyword arguments a Slack client expects,
e.g. ``WebClient.chat_postMessage(**build_post_message_kwargs(...))``.

The ``text`` argument is always sent as mrkdwn: Slack shows it in
notifications, and as the message body when no blocks are given.
Blocks and attachments come from a compiled BlocksPayload (or block
JSON supplied by the caller) and are passed through unmodified.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, TypeAlias

from .blocks import BlocksPayload
from .compiler import compile_blocks
from .config import BlockLimits, config
from .mrkdwn import convert_inline

logger = logging.getLogger(__name__)

_THREAD_TS_RE = re.compile(r"^\d+\.\d+$")

_TRUTHY = {"true", "1", "yes", "on"}
_FALSY = {"false", "0", "no", "off"}


class PayloadError(ValueError):
    """Raised when caller input cannot be turned into a message payload."""


@dataclass(frozen=True, slots=True)
class RawBlocks:
    """Caller-supplied block JSON, passed through without compilation."""

    blocks: tuple[dict[str, Any], ...]

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {"blocks": list(self.blocks), "attachments": []}


MessageBody: TypeAlias = BlocksPayload | RawBlocks


def _parse_json_blocks(raw: str) -> RawBlocks:
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        raise PayloadError(f"--blocks value is not valid JSON: {raw[:80]}") from e
    if not isinstance(parsed, list):
        raise PayloadError("--blocks JSON must be an array of block objects.")
    if not all(isinstance(entry, dict) for entry in parsed):
        raise PayloadError("--blocks JSON array must contain only objects.")
    return RawBlocks(blocks=tuple(parsed))


def resolve_blocks_option(
    raw: bool | str | None,
    fallback_text: str,
    limits: BlockLimits | None = None,
) -> MessageBody | None:
    """Resolve a ``--blocks`` option value into a payload.

    - ``None``/``False`` or a falsy word: no blocks.
    - ``True`` or a truthy word: compile ``fallback_text``.
    - A string starting with ``[``: a JSON array of block objects.
    - Any other string: markdown source to compile.
    """
    if raw is None or raw is False:
        return None
    limits = limits or config.limits
    if raw is True:
        return compile_blocks(fallback_text, limits)

    trimmed = raw.strip()
    if trimmed.startswith("["):
        try:
            return _parse_json_blocks(trimmed)
        except PayloadError as e:
            logger.warning("Rejected --blocks value: %s", e)
            raise

    normalized = trimmed.lower()
    if normalized in _FALSY:
        return None
    if normalized in _TRUTHY:
        return compile_blocks(fallback_text, limits)
    return compile_blocks(raw, limits)


def build_post_message_kwargs(
    channel: str,
    text: str,
    *,
    blocks: MessageBody | None = None,
    thread_ts: str | None = None,
    unfurl_links: bool | None = None,
    unfurl_media: bool | None = None,
    reply_broadcast: bool | None = None,
) -> dict[str, Any]:
    """Assemble keyword arguments for ``chat.postMessage``.

    Options left as ``None`` are omitted so Slack applies its defaults.
    """
    channel = channel.strip()
    if not channel:
        raise PayloadError("channel cannot be empty")

    kwargs: dict[str, Any] = {"channel": channel, "text": convert_inline(text)}

    if thread_ts is not None:
        thread_ts = thread_ts.strip()
        if not _THREAD_TS_RE.match(thread_ts):
            raise PayloadError(
                f"thread_ts must match Slack timestamp format seconds.fraction: {thread_ts!r}"
            )
        kwargs["thread_ts"] = thread_ts

    if blocks is not None:
        body = blocks.to_dict()
        kwargs["blocks"] = body["blocks"]
        if body["attachments"]:
            kwargs["attachments"] = body["attachments"]

    for name, value in (
        ("unfurl_links", unfurl_links),
        ("unfurl_media", unfurl_media),
        ("reply_broadcast", reply_broadcast),
    ):
        if value is not None:
            kwargs[name] = value

    logger.debug(
        "Built chat.postMessage payload for %s (%d blocks)",
        channel,
        len(kwargs.get("blocks", [])),
    )
    return kwargs
