"""HTML renderer for parsed replies.

Renders a Document to an HTML fragment for a chat bubble. Output is escaped
but not sanitized: link URLs pass through as written.

Thread Safety:
All per-render state lives in a RenderContext created for each render()
call. One HtmlRenderer instance can be shared between threads.
"""

import html
from dataclasses import dataclass, field
from urllib.parse import quote as url_quote

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
    Paragraph,
    Strong,
    Text,
)
from goteo.utils.logger import get_logger

logger = get_logger(__name__)


def html_escape(s: str) -> str:
    """Escape <, >, & and double quotes (single quotes are left alone)."""
    return html.escape(s, quote=False).replace('"', "&quot;")


def _encode_url(url: str) -> str:
    """Percent-encode spaces and non-ASCII, keeping URL punctuation."""
    return url_quote(url, safe="/:?#[]@!$&'()*+,;=-_.~%")


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state.

    Attributes:
        parts: Output fragments, joined once at the end
        languages: Code fence languages seen, in order
    """

    parts: list[str] = field(default_factory=list)
    languages: list[str] = field(default_factory=list)

    def append(self, s: str) -> None:
        if s:
            self.parts.append(s)


class HtmlRenderer:
    """Render a Document to HTML.

    Usage:
        >>> from goteo import parse
        >>> HtmlRenderer().render(parse("**hi**"))
        '<p><strong>hi</strong></p>\\n'

    Args:
        external_links: Open links in a new tab with
            ``target="_blank" rel="noopener noreferrer"``

    """

    __slots__ = ("_external_links", "_last_context")

    def __init__(self, *, external_links: bool = True) -> None:
        self._external_links = external_links
        self._last_context: RenderContext | None = None

    def render(self, node: Document) -> str:
        """Render document to an HTML string."""
        ctx = RenderContext()
        for child in node.children:
            self._render_block(child, ctx)
        self._last_context = ctx
        return "".join(ctx.parts)

    def get_languages(self) -> list[str]:
        """Code fence languages from the most recent render() call."""
        if self._last_context is None:
            return []
        return self._last_context.languages.copy()

    # =========================================================================
    # Block rendering
    # =========================================================================

    def _render_block(self, block: Block, ctx: RenderContext) -> None:
        match block:
            case Heading():
                ctx.append(f"<h{block.level}>")
                self._render_inlines(block.children, ctx)
                ctx.append(f"</h{block.level}>\n")
            case Paragraph():
                ctx.append("<p>")
                self._render_inlines(block.children, ctx)
                ctx.append("</p>\n")
            case List():
                self._render_list(block, ctx)
            case ListItem():
                self._render_list_item(block, ctx)
            case FencedCode():
                self._render_fenced_code(block, ctx)
            case BlankLine():
                ctx.append("<br />\n")
            case Document():
                for child in block.children:
                    self._render_block(child, ctx)
            case _:
                logger.debug("Skipping unknown block %r", type(block).__name__)

    def _render_list(self, lst: List, ctx: RenderContext) -> None:
        tag = "ol" if lst.ordered else "ul"
        ctx.append(f"<{tag}>\n")
        for item in lst.items:
            self._render_list_item(item, ctx)
        ctx.append(f"</{tag}>\n")

    def _render_list_item(self, item: ListItem, ctx: RenderContext) -> None:
        ctx.append("<li>")
        self._render_inlines(item.children, ctx)
        ctx.append("</li>\n")

    def _render_fenced_code(self, code: FencedCode, ctx: RenderContext) -> None:
        ctx.languages.append(code.language)
        lang_class = f' class="language-{html_escape(code.language)}"'
        ctx.append(f"<pre><code{lang_class}>")
        ctx.append(html_escape(code.code))
        ctx.append("</code></pre>\n")

    # =========================================================================
    # Inline rendering
    # =========================================================================

    def _render_inlines(self, inlines: tuple[Inline, ...], ctx: RenderContext) -> None:
        for inline in inlines:
            self._render_inline(inline, ctx)

    def _render_inline(self, inline: Inline, ctx: RenderContext) -> None:
        match inline:
            case Text():
                ctx.append(html_escape(inline.content))
            case Strong():
                ctx.append(f"<strong>{html_escape(inline.content)}</strong>")
            case Emphasis():
                ctx.append(f"<em>{html_escape(inline.content)}</em>")
            case CodeSpan():
                ctx.append(f"<code>{html_escape(inline.code)}</code>")
            case Link():
                href = html_escape(_encode_url(inline.url))
                target = ' target="_blank" rel="noopener noreferrer"' if self._external_links else ""
                ctx.append(f'<a href="{href}"{target}>{html_escape(inline.text)}</a>')
