"""goteo renderers.

Renderers turn a parsed Document into display output.

Available Renderers:
- HtmlRenderer: HTML fragment for a chat bubble

"""

from goteo.renderers.html import HtmlRenderer
from goteo.renderers.protocol import ASTRenderer

__all__ = ["ASTRenderer", "HtmlRenderer"]
