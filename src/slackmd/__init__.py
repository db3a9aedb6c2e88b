"""slackmd: markdown → Slack mrkdwn and Block Kit compiler.

File guide
----------
segmenter.py    Split text into code (kept verbatim) and markdown segments
mrkdwn.py       Inline conversion: **bold** and [links](https://...) → mrkdwn
splitter.py     Chunk text under the section character limit
tables.py       Pipe-table capping into a Slack table block
blocks.py       Header/Section/Divider/Table values and their Block Kit JSON
compiler.py     Markdown → capped blocks + table attachment
payload.py      chat.postMessage keyword arguments and --blocks resolution
config.py       Slack limits with SLACKMD_* environment overrides
"""

from .blocks import Attachment, BlocksPayload, Divider, Header, Section, Table
from .compiler import compile_blocks
from .mrkdwn import convert_inline

__all__ = [
    "Attachment",
    "BlocksPayload",
    "Divider",
    "Header",
    "Section",
    "Table",
    "compile_blocks",
    "convert_inline",
]
