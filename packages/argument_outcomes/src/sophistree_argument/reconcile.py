"""
Conclusion-list reconciliation.

The persisted conclusions live in a CRDT document where rewriting the whole
list bloats the change history. Instead of replacing the list, the freshly
extracted groups are merged into it with a minimal script of inserts,
replacements and deletions. Entries that did not change are left untouched.

Both lists must be sorted by ConclusionInfo.key, as extract_conclusions
returns them.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, MutableSequence, Optional, Sequence

from sophistree_argument.models.conclusion import ConclusionInfo

logger = logging.getLogger(__name__)


class EditKind(str, Enum):
    INSERT = "insert"
    REPLACE = "replace"
    DELETE = "delete"


@dataclass(frozen=True)
class ListEdit:
    """One list operation; `index` is valid at the moment the edit is applied."""

    kind: EditKind
    index: int
    value: Optional[ConclusionInfo] = None

    def describe(self) -> str:
        if self.value is None:
            return f"{self.kind.value} @{self.index}"
        ids = ", ".join(info.proposition_id for info in self.value.proposition_infos)
        return f"{self.kind.value} @{self.index}: {ids}"


def diff_conclusions(
    old: Sequence[ConclusionInfo],
    new: Sequence[ConclusionInfo],
) -> list[ListEdit]:
    """
    Compute the edit script turning `old` into `new`.

    Sorted merge-join with three cursors: into `old`, into `new`, and into the
    list being edited (`merged`).
    """
    edits: list[ListEdit] = []
    old_index = new_index = merged_index = 0

    while old_index < len(old) and new_index < len(new):
        old_conclusion = old[old_index]
        new_conclusion = new[new_index]
        if old_conclusion == new_conclusion:
            old_index += 1
            new_index += 1
            merged_index += 1
            continue

        old_key = old_conclusion.key
        new_key = new_conclusion.key
        if new_key < old_key:
            # The new conclusion comes before the old one
            edits.append(ListEdit(EditKind.INSERT, merged_index, new_conclusion))
            new_index += 1
            merged_index += 1
        elif new_key > old_key:
            # The old conclusion no longer exists
            edits.append(ListEdit(EditKind.DELETE, merged_index))
            old_index += 1
        else:
            edits.append(ListEdit(EditKind.REPLACE, merged_index, new_conclusion))
            old_index += 1
            new_index += 1
            merged_index += 1

    for _ in range(old_index, len(old)):
        edits.append(ListEdit(EditKind.DELETE, merged_index))
    for new_conclusion in new[new_index:]:
        edits.append(ListEdit(EditKind.INSERT, merged_index, new_conclusion))
        merged_index += 1

    return edits


def apply_edits(target: MutableSequence[ConclusionInfo], edits: Iterable[ListEdit]) -> None:
    """Replay an edit script on a mutable list, in order."""
    for edit in edits:
        if edit.kind is EditKind.INSERT:
            target.insert(edit.index, edit.value)
        elif edit.kind is EditKind.REPLACE:
            target[edit.index] = edit.value
        elif edit.kind is EditKind.DELETE:
            del target[edit.index]
        else:
            raise ValueError(f"Unknown edit kind: {edit.kind}")


def reconcile_conclusions(
    persisted: MutableSequence[ConclusionInfo],
    new: Sequence[ConclusionInfo],
) -> list[ListEdit]:
    """
    Merge `new` into `persisted` in place.

    Returns:
        The edits applied, empty when nothing changed
    """
    edits = diff_conclusions(list(persisted), new)
    apply_edits(persisted, edits)
    if edits:
        counts = Counter(edit.kind for edit in edits)
        logger.debug(
            "Reconciled conclusions: %d inserted, %d replaced, %d deleted",
            counts[EditKind.INSERT],
            counts[EditKind.REPLACE],
            counts[EditKind.DELETE],
        )
    return edits
