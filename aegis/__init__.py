# Core type aliases for the Aegis program model.
# The front-end compiler hands back plain JSON-like Python values (lists, str, int,
# dict, None). Nothing is wrapped on the way in; `aegis.tree.from_json` turns such a
# value into typed instruction nodes when structure matters.
#
# Naming guidance:
# - ProgramTree: the raw value produced by a front-end `compile` call.
# - JsonValue:   any element found inside a ProgramTree.

from typing import Any

JsonValue = Any
ProgramTree = JsonValue
