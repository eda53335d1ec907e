"""Parse and render an assistant reply."""

from goteo import parse, render

doc = parse("**Pros**:\n- easy to build\n- fast\n\nWhat do you think?")
print(render(doc))
