"""Line diff calculation, block navigation and block merging."""

from typing import Optional

from .models import DiffBlock, DiffKind

DEFAULT_LOOKAHEAD = 3


def _resync_step(left: list[str], right: list[str], i: int, j: int, lookahead: int) -> tuple[int, int]:
    """Advance one step through a divergence, trying to land on a matching pair."""
    for k in range(1, lookahead + 1):
        if i + k < len(left) and left[i + k] == right[j]:
            return i + k, j
    for k in range(1, lookahead + 1):
        if j + k < len(right) and right[j + k] == left[i]:
            return i, j + k
    return i + 1, j + 1


def _classify(left_advanced: int, right_advanced: int) -> DiffKind:
    if right_advanced == 0:
        return DiffKind.DELETE
    if left_advanced == 0:
        return DiffKind.ADD
    return DiffKind.MODIFY


def calculate_diff(left: list[str], right: list[str], lookahead: int = DEFAULT_LOOKAHEAD) -> list[DiffBlock]:
    """
    Partition two line buffers into an ordered list of classified blocks.

    Runs of equal lines become ``equal`` blocks. On a mismatch the scan looks
    up to ``lookahead`` lines ahead on the left, then on the right, for a line
    matching the other side's current line; if neither is found both sides
    advance by one. This is not a minimal edit script: divergences longer than
    the lookahead are reported as a single ``modify`` block.

    Args:
        left: Left line buffer
        right: Right line buffer
        lookahead: Resynchronization window

    Returns:
        Blocks jointly covering both buffers with no gaps or overlaps
    """
    blocks = []
    n, m = len(left), len(right)
    i = j = 0

    while i < n or j < m:
        start_i, start_j = i, j

        if i < n and j < m and left[i] == right[j]:
            while i < n and j < m and left[i] == right[j]:
                i += 1
                j += 1
            blocks.append(DiffBlock(start_i, i - 1, start_j, j - 1, DiffKind.EQUAL))
            continue

        if i >= n:
            j = m
        elif j >= m:
            i = n
        else:
            while i < n and j < m and left[i] != right[j]:
                i, j = _resync_step(left, right, i, j, lookahead)

        blocks.append(DiffBlock(
            start_i, i - 1, start_j, j - 1,
            _classify(i - start_i, j - start_j)
        ))

    if not blocks:
        blocks.append(DiffBlock(0, -1, 0, -1, DiffKind.EQUAL))
    return blocks


def find_next_difference(blocks: list[DiffBlock], current: int) -> Optional[tuple[int, bool]]:
    """
    Find the next non-equal block after ``current``, wrapping to the start.

    Returns:
        Tuple of (block index, wrapped) or None if every block is equal
    """
    for i in range(current + 1, len(blocks)):
        if blocks[i].kind is not DiffKind.EQUAL:
            return i, False
    for i in range(0, min(current + 1, len(blocks))):
        if blocks[i].kind is not DiffKind.EQUAL:
            return i, True
    return None


def find_previous_difference(blocks: list[DiffBlock], current: int) -> Optional[tuple[int, bool]]:
    """
    Find the previous non-equal block before ``current``, wrapping to the end.

    Returns:
        Tuple of (block index, wrapped) or None if every block is equal
    """
    for i in range(min(current, len(blocks)) - 1, -1, -1):
        if blocks[i].kind is not DiffKind.EQUAL:
            return i, False
    for i in range(len(blocks) - 1, max(current, 0) - 1, -1):
        if blocks[i].kind is not DiffKind.EQUAL:
            return i, True
    return None


def splice_block(source: list[str], target: list[str], source_range: tuple[int, int],
                 target_range: tuple[int, int]) -> None:
    """
    Replace the target range of ``target`` with the source range of ``source``.

    Ranges are closed intervals; an empty range inserts at its start.
    """
    src_start, src_end = source_range
    dst_start, dst_end = target_range
    target[dst_start:dst_end + 1] = source[src_start:src_end + 1]
