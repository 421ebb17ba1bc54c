from typing import Sequence, Tuple


class SparseArray:
    """
    Sparse Array object (matrix dominated by zero elements)
    structured by triplets of (row, col, value) of non-zero elements in the matrix
    """

    def __init__(
        self,
        rows: Sequence[Sequence[Tuple[int, int]]],
        n_row: int,
        n_col: int,
        p: int,
    ):
        self.p = p
        self.n_row = n_row
        self.n_col = n_col
        self.triplets = []
        self.triplets_map = {}

        for i, row in enumerate(rows):
            self.append_row(i, row)

    def append_row(self, i: int, row: Sequence[Tuple[int, int]]):
        """Insert non-zero `(col, value)` entries of row `i`"""
        assert i < self.n_row, f"Row {i} exceeds matrix size {self.n_row}"

        for col, value in row:
            value %= self.p
            if value == 0:
                continue
            assert col < self.n_col, f"Column {col} exceeds matrix size {self.n_col}"
            self.triplets.append((i, col, value))
            self.triplets_map.setdefault(i, []).append((col, value))

    def dot(self, vector):
        """dot product with vector"""
        result = [0] * self.n_row
        for row, col, value in self.triplets:
            result[row] += vector[col] * value

        return [x % self.p for x in result]

    def column_dot(self, vector):
        """dot product of every column with `vector` indexed by row"""
        result = [0] * self.n_col
        for row, col, value in self.triplets:
            result[col] += vector[row] * value

        return [x % self.p for x in result]
