"""Two-pass Markdown parsing.

- blocks: segment() splits text into block nodes, one forward line scan
- inline: tokenize() splits one block's text into inline spans

Both passes are pure and never raise.
"""

from goteo.parsing.blocks import segment
from goteo.parsing.inline import INLINE_RULES, tokenize

__all__ = ["INLINE_RULES", "segment", "tokenize"]
