"""Ship a parsed reply as JSON and restore it."""

from goteo import parse
from goteo.serialization import from_json, to_json

doc = parse("1. Measure first\n2. Then `optimize`")
payload = to_json(doc, indent=2)
print(payload)

assert from_json(payload) == doc
