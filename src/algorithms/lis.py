from typing import List, Optional, Sequence


class LongestIncreasingSubsequence:
    """Patience sorting LIS over a sequence with ``None`` holes.

    ``None`` entries are skipped. The result is a list of offsets into the
    input whose values are strictly increasing.
    """

    def __init__(self, seq: Sequence[Optional[int]]):
        self.seq = seq
        self._tails: List[int] = []
        self._predecessors: List[Optional[int]] = []

    def compute(self) -> List[int]:
        seq = self.seq
        tails: List[int] = []
        predecessors: List[Optional[int]] = [None] * len(seq)
        for idx, value in enumerate(seq):
            if value is None:
                continue
            if not tails or seq[tails[-1]] < value:
                if tails:
                    predecessors[idx] = tails[-1]
                tails.append(idx)
                continue
            left, right = 0, len(tails) - 1
            while left < right:
                mid = (left + right) // 2
                if seq[tails[mid]] < value:
                    left = mid + 1
                else:
                    right = mid
            # equal values never replace a tail
            if value < seq[tails[left]]:
                if left > 0:
                    predecessors[idx] = tails[left - 1]
                tails[left] = idx
        self._tails = tails
        self._predecessors = predecessors
        return self._backtrack()

    def _backtrack(self) -> List[int]:
        # tails is only correct at its last entry; earlier ones may have been overwritten
        result: List[int] = []
        cursor = self._tails[-1] if self._tails else None
        while cursor is not None:
            result.append(cursor)
            cursor = self._predecessors[cursor]
        result.reverse()
        return result


def longest_increasing_subsequence(seq: Sequence[Optional[int]]) -> List[int]:
    solver = LongestIncreasingSubsequence(seq)
    return solver.compute()


def lis_length(seq: Sequence[Optional[int]]) -> int:
    return len(longest_increasing_subsequence(seq))


def lis_values(seq: Sequence[Optional[int]]) -> List[int]:
    return [seq[offset] for offset in longest_increasing_subsequence(seq)]
