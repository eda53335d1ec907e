"""
goteo: Markdown rendering for streamed assistant replies

Parses the small Markdown dialect chat assistants write (headings, flat
lists, fenced code, bold/italic/code/link spans) into a typed node tree. It
also simulates a reply arriving a few characters at a time.

Quick Start:
    >>> from goteo import parse, render
    >>> doc = parse("## Plan\\n1. **Measure**\\n2. Fix")
    >>> print(render(doc), end="")
    <h2>Plan</h2>
    <ol>
    <li><strong>Measure</strong></li>
    <li>Fix</li>
    </ol>

Streaming:
    >>> from goteo import DocumentStream, StreamingEngine, VirtualClock
    >>> clock = VirtualClock()
    >>> engine = StreamingEngine(scheduler=clock)
    >>> frames = []
    >>> _ = engine.start("**hi**", "msg-1", DocumentStream(lambda doc, done: frames.append(render(doc))))
    >>> clock.run_until_idle()
    3
    >>> frames[-1]
    '<p><strong>hi</strong></p>\\n'

Inside an asyncio program, leave out ``scheduler`` and the engine uses the
running event loop.
"""

from goteo.config import (
    ParseConfig,
    StreamConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from goteo.errors import ConfigError, GoteoError, StreamError
from goteo.incremental import parse_incremental
from goteo.location import SourceLocation
from goteo.nodes import (
    BlankLine,
    Block,
    CodeSpan,
    Document,
    Emphasis,
    FencedCode,
    Heading,
    Inline,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    Strong,
    Text,
)
from goteo.parser import parse
from goteo.parsing import segment, tokenize
from goteo.renderers.html import HtmlRenderer
from goteo.renderers.protocol import ASTRenderer
from goteo.serialization import from_dict, from_json, to_dict, to_json
from goteo.streaming import (
    DocumentStream,
    Scheduler,
    StreamingEngine,
    StreamSession,
    StreamState,
    VirtualClock,
)

__version__ = "0.1.0"


def render(doc: Document, *, external_links: bool = True) -> str:
    """Render a Document to HTML.

    Args:
        doc: Parsed document
        external_links: Open links in a new tab

    Returns:
        HTML fragment

    """
    return HtmlRenderer(external_links=external_links).render(doc)


__all__ = [
    "ASTRenderer",
    "BlankLine",
    "Block",
    "CodeSpan",
    "ConfigError",
    "Document",
    "DocumentStream",
    "Emphasis",
    "FencedCode",
    "GoteoError",
    "Heading",
    "HtmlRenderer",
    "Inline",
    "Link",
    "List",
    "ListItem",
    "Node",
    "Paragraph",
    "ParseConfig",
    "Scheduler",
    "SourceLocation",
    "StreamConfig",
    "StreamError",
    "StreamSession",
    "StreamState",
    "StreamingEngine",
    "Strong",
    "Text",
    "VirtualClock",
    "__version__",
    "from_dict",
    "from_json",
    "get_parse_config",
    "parse",
    "parse_config_context",
    "parse_incremental",
    "render",
    "reset_parse_config",
    "segment",
    "set_parse_config",
    "to_dict",
    "to_json",
    "tokenize",
]
