"""
Line-level diff engine.

Implements the Myers O(ND) shortest edit script. Lines are compared with
plain string equality; whitespace and case are significant because a
trailing space in a configuration value is a real change.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence


class DiffTag(str, Enum):
    EQUAL = "equal"
    DELETE = "delete"
    INSERT = "insert"


@dataclass(frozen=True)
class DiffOp:
    """
    A single edit script step.

    index_a / index_b are 1-based line numbers in the old and new text.
    Only the side(s) the line belongs to are set.
    """
    tag: DiffTag
    text: str
    index_a: Optional[int] = None
    index_b: Optional[int] = None

    def to_dict(self) -> dict:
        result = {"tag": self.tag.value, "text": self.text}
        if self.index_a is not None:
            result["index_a"] = self.index_a
        if self.index_b is not None:
            result["index_b"] = self.index_b
        return result


@dataclass(frozen=True)
class DocumentDiff:
    """Edit script for two whole texts."""
    operations: tuple[DiffOp, ...]

    @property
    def insert_count(self) -> int:
        return sum(1 for op in self.operations if op.tag == DiffTag.INSERT)

    @property
    def delete_count(self) -> int:
        return sum(1 for op in self.operations if op.tag == DiffTag.DELETE)

    @property
    def is_identical(self) -> bool:
        return all(op.tag == DiffTag.EQUAL for op in self.operations)

    def to_dict(self) -> dict:
        return {
            "is_identical": self.is_identical,
            "insert_count": self.insert_count,
            "delete_count": self.delete_count,
            "operations": [op.to_dict() for op in self.operations]
        }


def split_lines(text: str) -> list[str]:
    """Split text into lines for diffing. Empty text has no lines."""
    if not text:
        return []
    return text.splitlines()


def _moves_down(frontier: list[int], d: int, k: int) -> bool:
    """
    Whether the best path to diagonal k at step d comes from k + 1 (an insert).

    `frontier` is the snapshot taken at the start of step d and is indexed
    from diagonal -d - 1.
    """
    if k == -d:
        return True
    if k == d:
        return False
    return frontier[k - 1 + d + 1] < frontier[k + 1 + d + 1]


def _shortest_edit_trace(a: Sequence[str], b: Sequence[str]) -> list[list[int]]:
    """
    Run the forward Myers search.

    Returns one frontier snapshot per edit distance d, taken before step d
    runs. Snapshot d only covers diagonals -d - 1 .. d + 1, which is all
    the backtrack ever reads from it.
    """
    n, m = len(a), len(b)
    max_d = n + m
    offset = max_d + 1
    v = [0] * (2 * max_d + 3)
    trace: list[list[int]] = []

    for d in range(max_d + 1):
        trace.append(v[offset - d - 1:offset + d + 2])

        for k in range(-d, d + 1, 2):
            if k == -d or (k != d and v[offset + k - 1] < v[offset + k + 1]):
                x = v[offset + k + 1]
            else:
                x = v[offset + k - 1] + 1
            y = x - k

            while x < n and y < m and a[x] == b[y]:
                x += 1
                y += 1

            v[offset + k] = x

            if x >= n and y >= m:
                return trace

    return trace


def diff_lines(a: Sequence[str], b: Sequence[str]) -> list[DiffOp]:
    """
    Compute a shortest edit script turning `a` into `b`.

    The first edit distance at which the search reaches the end of both
    sequences is the minimum, so the script never contains more
    inserts + deletes than necessary.
    """
    trace = _shortest_edit_trace(a, b)

    x, y = len(a), len(b)
    ops: list[DiffOp] = []

    for d in range(len(trace) - 1, -1, -1):
        frontier = trace[d]
        k = x - y

        prev_k = k + 1 if _moves_down(frontier, d, k) else k - 1
        prev_x = frontier[prev_k + d + 1]
        prev_y = prev_x - prev_k

        while x > prev_x and y > prev_y:
            ops.append(DiffOp(DiffTag.EQUAL, a[x - 1], index_a=x, index_b=y))
            x -= 1
            y -= 1

        if d > 0:
            if x == prev_x:
                ops.append(DiffOp(DiffTag.INSERT, b[y - 1], index_b=y))
            else:
                ops.append(DiffOp(DiffTag.DELETE, a[x - 1], index_a=x))

        x, y = prev_x, prev_y

    ops.reverse()
    return ops


def diff_documents(text_a: str, text_b: str) -> DocumentDiff:
    """Diff two whole texts line by line."""
    return DocumentDiff(
        operations=tuple(diff_lines(split_lines(text_a), split_lines(text_b)))
    )
