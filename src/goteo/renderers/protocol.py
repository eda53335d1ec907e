"""ASTRenderer protocol, the interface the display layer depends on.

Any renderer that implements ``render(node) -> str`` conforms.
``HtmlRenderer`` is the built-in implementation.

Example:
    from goteo.renderers.protocol import ASTRenderer

    def show(renderer: ASTRenderer, doc: Document) -> str:
        return renderer.render(doc)

"""

from typing import Protocol

from goteo.nodes import Document


class ASTRenderer(Protocol):
    """Protocol for Document renderers."""

    def render(self, node: Document) -> str:
        """Render a Document to a string."""
        ...
