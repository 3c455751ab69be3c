from collections.abc import Hashable, Mapping, Sequence
from typing import Any, NotRequired, TypedDict

NodeId = Hashable
Node = Mapping[str, Any]
Forest = Sequence[Node]


class BulkNodeData(TypedDict):
    """Structure used by :func:`treeutil.convert.to_bulk` and
    :func:`treeutil.convert.from_bulk`.

    Note: When ``keep_ids=True``, the id field name (e.g., "id")
    exists as a top-level key alongside "data" and "children".
    """

    data: dict[str, Any]
    children: NotRequired[list["BulkNodeData"]]
