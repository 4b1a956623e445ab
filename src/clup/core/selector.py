"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/selector.py
Picks the single surviving file of a duplicate group.

The scan walks the group in discovery order and keeps the earliest-created
file seen so far. Every file that loses the comparison is handed to the
duplicate handler at that moment. A later file with the same creation time
loses, so ties keep the first-encountered file.
"""

from typing import List, Sequence

from clup.core.interfaces import DuplicateHandler
from clup.core.models import File, DuplicateGroup


def select_original(files: Sequence[File], handler: DuplicateHandler) -> File:
    """
    Returns the survivor of `files`; calls handler once for every other file.
    Must run sequentially: each step depends on the current best.
    """
    if not files:
        raise ValueError("Cannot select an original from an empty group")

    best = files[0]
    for file in files[1:]:
        if file.creation_time >= best.creation_time:
            handler(file)
        else:
            handler(best)
            best = file
    return best


def survivor_first(files: Sequence[File], survivor: File) -> List[File]:
    """Group members with the survivor moved to the front, others in discovery order."""
    return [survivor] + [f for f in files if f is not survivor]


def resolve_group(group: DuplicateGroup, handler: DuplicateHandler, statistics) -> File:
    """Selects the survivor of one group and records the group in the statistics."""
    survivor = select_original(group.files, handler)
    ordered = survivor_first(group.files, survivor)
    statistics.record_group(ordered)
    statistics.record_resolved_group(group.key, ordered)
    return survivor
