"""
Compressed Sparse Row (CSR) Matrix
"""

import numbers
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np

# Signature of `map` callbacks: (value, row, col) -> new value
EntryFn = Callable[[float, int, int], float]


class Matrix(object):
    """ Sparse `rows` x `cols` matrix, stored as three aligned lists.

    * `V` holds the stored (non-zero) values
    * `COL_INDEX[k]` is the column of `V[k]`
    * `ROW_INDEX[r]` is the offset of row `r`'s first entry; `ROW_INDEX[rows] == len(V)`

    Within each row, columns are strictly increasing and no stored value is zero.
    Every operation other than `set` returns a new Matrix with its own lists. """

    def __init__(self, rows: int, cols: int, data: Optional[Sequence] = None):
        InvalidShape.assert_true(_is_dim(rows) and _is_dim(cols),
                                 f'Invalid shape ({rows!r}, {cols!r}): dimensions must be positive integers')
        self.rows = int(rows)
        self.cols = int(cols)
        self.V: List[float] = []
        self.COL_INDEX: List[int] = []
        self.ROW_INDEX: List[int] = [0] * (self.rows + 1)
        if data is not None:
            self._compress(data)

    @classmethod
    def _from_csr(cls, rows: int, cols: int, V: list, COL_INDEX: list, ROW_INDEX: list) -> "Matrix":
        """ Wrap already-valid CSR lists, without shape validation.
        Used by operations whose outputs are valid by construction, including empty minors. """
        m = cls.__new__(cls)
        m.rows = rows
        m.cols = cols
        m.V = V
        m.COL_INDEX = COL_INDEX
        m.ROW_INDEX = ROW_INDEX
        return m

    def _compress(self, data: Sequence) -> None:
        """ Compress dense `data` into our CSR lists.
        Rows and cells beyond `data`'s extent, non-numeric cells, and zeros are all skipped. """
        V, COL_INDEX, ROW_INDEX = [], [], [0]
        for i in range(self.rows):
            src = data[i] if i < len(data) else None
            if src is not None and hasattr(src, '__len__'):
                for j in range(min(self.cols, len(src))):
                    val = src[j]
                    if isinstance(val, np.generic):
                        val = val.item()
                    if _is_number(val) and val != 0:
                        V.append(val)
                        COL_INDEX.append(j)
            ROW_INDEX.append(len(V))
        self.V, self.COL_INDEX, self.ROW_INDEX = V, COL_INDEX, ROW_INDEX

    @classmethod
    def from_array(cls, arr: Sequence) -> "Matrix":
        """ Create a 1 x n row-matrix from the list `arr` """
        return cls(1, len(arr), [arr])

    @classmethod
    def from_dense(cls, data: Sequence) -> "Matrix":
        """ Create a Matrix sized to fit (possibly ragged) dense `data` """
        rows = len(data)
        cols = max((len(r) for r in data if r is not None), default=0)
        return cls(rows, cols, data)

    @classmethod
    def identity(cls, n: int) -> "Matrix":
        """ Square `n` x `n` Matrix.
        Note this is *structurally empty*, as it has always been:
        no diagonal entries are stored. Callers `set` them as needed. """
        return cls(n, n)

    @classmethod
    def zeros(cls, rows: int, cols: int) -> "Matrix":
        return cls(rows, cols)

    @classmethod
    def random(cls, rows: int, cols: int, rand_function: Optional[Callable[[], float]] = None) -> "Matrix":
        """ Create a Matrix with one call to `rand_function` per cell, in row-major order.
        Defaults to a standard-normal generator. Exact-zero samples are not stored. """
        if rand_function is None:
            from ..rand import rand_function as default_rand
            rand_function = default_rand()
        InvalidShape.assert_true(_is_dim(rows) and _is_dim(cols),
                                 f'Invalid shape ({rows!r}, {cols!r}): dimensions must be positive integers')
        data = [[rand_function() for _ in range(cols)] for _ in range(rows)]
        return cls(rows, cols, data)

    @classmethod
    def from_dict(cls, d: dict) -> "Matrix":
        """ Re-create a Matrix from its persisted form, as produced by `to_dict` """
        m = cls(d['rows'], d['cols'])
        V = list(d['V'])
        COL_INDEX = [int(c) for c in d['COL_INDEX']]
        ROW_INDEX = [int(r) for r in d['ROW_INDEX']]
        MatrixError.assert_eq(len(V), len(COL_INDEX), 'V and COL_INDEX lengths differ')
        MatrixError.assert_eq(len(ROW_INDEX), m.rows + 1, 'ROW_INDEX must have rows + 1 entries')
        MatrixError.assert_eq(ROW_INDEX[-1], len(V), 'ROW_INDEX must end at the entry count')
        m.V, m.COL_INDEX, m.ROW_INDEX = V, COL_INDEX, ROW_INDEX
        m._checkup()
        return m

    def to_dict(self) -> dict:
        """ Persisted form: plain lists and ints, JSON and YAML friendly """
        return dict(
            rows=self.rows,
            cols=self.cols,
            V=[v.item() if isinstance(v, np.generic) else v for v in self.V],
            COL_INDEX=list(self.COL_INDEX),
            ROW_INDEX=list(self.ROW_INDEX),
        )

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def nnz(self) -> int:
        """ Number of stored entries """
        return self.ROW_INDEX[-1]

    @property
    def data(self) -> List[List[float]]:
        """ Dense projection, as a `rows` x `cols` nested list """
        data = [[0] * self.cols for _ in range(self.rows)]
        for val, row, col in self.elements():
            data[row][col] = val
        return data

    def to_array(self) -> List[float]:
        """ Dense projection, flattened in row-major order """
        return [val for row in self.data for val in row]

    def to_numpy(self) -> np.ndarray:
        return np.array(self.data, dtype='float64').reshape(self.rows, self.cols)

    def __repr__(self):
        return f"<{self.__class__.__name__}(rows={self.rows}, cols={self.cols}, nnz={self.nnz})>"

    def __eq__(self, other):
        if not isinstance(other, Matrix): return NotImplemented
        if self.shape != other.shape: return False
        return (self.ROW_INDEX == other.ROW_INDEX and
                self.COL_INDEX == other.COL_INDEX and
                self.V == other.V)

    def display(self) -> str:
        """ Create a string "X" versus " " display of matrix entries. """
        s = ''
        for r in range(self.rows):
            row = [' '] * self.cols
            for _, col in self.row_elements(r):
                row[col] = 'X'
            s += ''.join(row) + '\n'
        return s

    def copy(self) -> "Matrix":
        """ Deep copy. Shares no lists with `self`. """
        return Matrix._from_csr(self.rows, self.cols, list(self.V), list(self.COL_INDEX), list(self.ROW_INDEX))

    def elements(self, strict: bool = True) -> Iterator[Tuple[float, int, int]]:
        """ Iterator of (value, row, col) tuples, row-major.
        If `strict`, only stored entries are visited. Otherwise every cell, zeros included. """
        if strict:
            for row in range(self.rows):
                for k in range(self.ROW_INDEX[row], self.ROW_INDEX[row + 1]):
                    yield self.V[k], row, self.COL_INDEX[k]
        else:
            for row in range(self.rows):
                for col in range(self.cols):
                    yield self.get(row, col), row, col

    def row_elements(self, row: int, strict: bool = True) -> Iterator[Tuple[float, int]]:
        """ Iterator of (value, col) tuples in row `row` """
        if strict:
            for k in range(self.ROW_INDEX[row], self.ROW_INDEX[row + 1]):
                yield self.V[k], self.COL_INDEX[k]
        else:
            for col in range(self.cols):
                yield self.get(row, col), col

    def col_elements(self, col: int, strict: bool = True) -> Iterator[Tuple[float, int]]:
        """ Iterator of (value, row) tuples in column `col`.
        Searches each row, so this is much slower than `row_elements`. """
        for row in range(self.rows):
            val = self.get(row, col)
            if val != 0 or not strict:
                yield val, row

    def values(self) -> Iterator[float]:
        """ Row-major iterator of stored values """
        yield from self.V

    def for_each(self, fn: Callable[[float, int, int], None], strict: bool = True) -> None:
        """ Call `fn(value, row, col)` for each element visited by `elements(strict)` """
        for val, row, col in self.elements(strict):
            fn(val, row, col)

    def map(self, fn: EntryFn, strict: bool = True) -> "Matrix":
        """ Return a new Matrix of `fn(value, row, col)`.
        With `strict`, only stored entries are mapped and absent cells stay zero.
        Otherwise `fn` sees every cell. Zero results are not stored. `self` is never modified. """
        V, COL_INDEX, ROW_INDEX = [], [], [0]
        for row in range(self.rows):
            for val, col in self.row_elements(row, strict):
                new = fn(val, row, col)
                if new != 0:
                    V.append(new)
                    COL_INDEX.append(col)
            ROW_INDEX.append(len(V))
        return Matrix._from_csr(self.rows, self.cols, V, COL_INDEX, ROW_INDEX)

    def _find(self, row: int, col: int) -> Tuple[int, bool]:
        """ Search row `row` for column `col`.
        Returns (index, found). If not found, `index` is where `col` belongs in sorted order. """
        k = self.ROW_INDEX[row]
        end = self.ROW_INDEX[row + 1]
        while k < end and self.COL_INDEX[k] < col:
            k += 1
        return k, (k < end and self.COL_INDEX[k] == col)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def get(self, row: int, col: int) -> float:
        """ Get the value at (row, col). Zero if nothing is stored there, or if out of bounds. """
        if not self.in_bounds(row, col): return 0
        k, found = self._find(row, col)
        return self.V[k] if found else 0

    def set(self, row: int, col: int, value: float) -> None:
        """ Set the value at (row, col), in place.
        Inserting or removing an entry shifts every later row-offset, so this costs O(row-width + rows). """
        MatrixIndexError.assert_true(self.in_bounds(row, col),
                                     f'Index ({row}, {col}) out of bounds for shape {self.shape}')
        k, found = self._find(row, col)
        if found:
            if value == 0:  # Remove
                del self.V[k]
                del self.COL_INDEX[k]
                for r in range(row + 1, self.rows + 1):
                    self.ROW_INDEX[r] -= 1
            else:  # Overwrite
                self.V[k] = value
        elif value != 0:  # Insert, at its sorted position within the row
            self.V.insert(k, value)
            self.COL_INDEX.insert(k, col)
            for r in range(row + 1, self.rows + 1):
                self.ROW_INDEX[r] += 1

    def transpose(self) -> "Matrix":
        """ Bucket-transpose, in O(nnz + cols).
        Count entries per column, prefix-sum those into row offsets, then scatter. """
        ROW_INDEX = [0] * (self.cols + 1)
        for col in self.COL_INDEX:
            ROW_INDEX[col + 1] += 1
        for c in range(1, self.cols + 1):
            ROW_INDEX[c] += ROW_INDEX[c - 1]

        nnz = self.nnz
        V = [0] * nnz
        COL_INDEX = [0] * nnz
        cursor = ROW_INDEX[:]
        for row in range(self.rows):
            for k in range(self.ROW_INDEX[row], self.ROW_INDEX[row + 1]):
                col = self.COL_INDEX[k]
                pos = cursor[col]
                cursor[col] += 1
                V[pos] = self.V[k]
                COL_INDEX[pos] = row

        return Matrix._from_csr(self.cols, self.rows, V, COL_INDEX, ROW_INDEX)

    def _check_same_shape(self, other: "Matrix") -> None:
        DimensionMismatch.assert_eq(self.shape, other.shape,
                                    f'Matrix dimensions must match: {self.shape} vs {other.shape}')

    def _merge(self, other: "Matrix", sign: int) -> "Matrix":
        """ Row-by-row merge of `self + sign * other` """
        self._check_same_shape(other)

        V, COL_INDEX, ROW_INDEX = [], [], [0]
        for row in range(self.rows):
            acc: Dict[int, float] = {}
            for val, col in self.row_elements(row):
                acc[col] = acc.get(col, 0) + val
            for val, col in other.row_elements(row):
                acc[col] = acc.get(col, 0) + sign * val
            _emit(acc, V, COL_INDEX)
            ROW_INDEX.append(len(V))

        return Matrix._from_csr(self.rows, self.cols, V, COL_INDEX, ROW_INDEX)

    def add(self, other: "Matrix") -> "Matrix":
        """ Element-wise sum `self + other` """
        return self._merge(other, sign=1)

    def subtract(self, other: "Matrix") -> "Matrix":
        """ Element-wise difference `self - other` """
        return self._merge(other, sign=-1)

    def hadamard(self, other: "Matrix") -> "Matrix":
        """ Element-wise (Hadamard) product.
        "Two pointer" walk along each pair of rows, relying on their sorted columns. """
        self._check_same_shape(other)

        V, COL_INDEX, ROW_INDEX = [], [], [0]
        for row in range(self.rows):
            a, a_end = self.ROW_INDEX[row], self.ROW_INDEX[row + 1]
            b, b_end = other.ROW_INDEX[row], other.ROW_INDEX[row + 1]
            while a < a_end and b < b_end:
                a_col = self.COL_INDEX[a]
                b_col = other.COL_INDEX[b]
                if a_col < b_col:
                    a += 1
                elif b_col < a_col:
                    b += 1
                else:
                    val = self.V[a] * other.V[b]
                    if val != 0:
                        V.append(val)
                        COL_INDEX.append(a_col)
                    a += 1
                    b += 1
            ROW_INDEX.append(len(V))

        return Matrix._from_csr(self.rows, self.cols, V, COL_INDEX, ROW_INDEX)

    def multiply(self, other: "Matrix") -> "Matrix":
        """ Matrix multiplication self * other.
        Each stored (k, a) in row i of `self` scales row k of `other` into row i's accumulator. """
        DimensionMismatch.assert_eq(self.cols, other.rows,
                                    f'Cannot multiply {self.shape} by {other.shape}')

        V, COL_INDEX, ROW_INDEX = [], [], [0]
        for row in range(self.rows):
            acc: Dict[int, float] = {}
            for a_val, k in self.row_elements(row):
                for b_val, col in other.row_elements(k):
                    acc[col] = acc.get(col, 0) + a_val * b_val
            _emit(acc, V, COL_INDEX)
            ROW_INDEX.append(len(V))

        return Matrix._from_csr(self.rows, other.cols, V, COL_INDEX, ROW_INDEX)

    addition = add
    __add__ = add
    __sub__ = subtract
    __matmul__ = multiply

    def determinant(self) -> float:
        """ Determinant, by first-row cofactor expansion. Only suitable for small matrices. """
        from .det import determinant
        return determinant(self)

    def _checkup(self):
        """ Internal consistency tests. Linear in nnz + rows. """
        MatrixError.assert_eq(len(self.ROW_INDEX), self.rows + 1)
        MatrixError.assert_eq(self.ROW_INDEX[0], 0)
        MatrixError.assert_eq(self.ROW_INDEX[-1], len(self.V))
        MatrixError.assert_eq(len(self.COL_INDEX), len(self.V))
        for row in range(self.rows):
            start, end = self.ROW_INDEX[row], self.ROW_INDEX[row + 1]
            MatrixError.assert_true(start <= end, f'ROW_INDEX decreases at row {row}')
            for k in range(start, end):
                MatrixError.assert_true(0 <= self.COL_INDEX[k] < self.cols, f'Column out of range in row {row}')
                MatrixError.assert_not_eq(self.V[k], 0, f'Explicit zero stored in row {row}')
                if k > start:
                    MatrixError.assert_true(self.COL_INDEX[k - 1] < self.COL_INDEX[k],
                                            f'Columns not strictly increasing in row {row}')


def _emit(acc: Dict[int, float], V: list, COL_INDEX: list) -> None:
    """ Append the non-zero entries of column-keyed accumulator `acc`, in ascending column order """
    for col in sorted(acc):
        val = acc[col]
        if val != 0:
            V.append(val)
            COL_INDEX.append(col)


def _is_number(x) -> bool:
    return isinstance(x, numbers.Number) and not isinstance(x, bool)


def _is_dim(x) -> bool:
    return isinstance(x, numbers.Integral) and not isinstance(x, bool) and x > 0


class MatrixError(Exception):
    @classmethod
    def assert_true(cls, cond, msg: Optional[str] = None):
        if not cond:
            raise cls(msg) if msg else cls()

    @classmethod
    def assert_eq(cls, x, y, msg: Optional[str] = None):
        if x != y:
            raise cls(msg) if msg else cls(f'{x!r} != {y!r}')

    @classmethod
    def assert_not_eq(cls, x, y, msg: Optional[str] = None):
        if x == y:
            raise cls(msg) if msg else cls(f'{x!r} == {y!r}')


class InvalidShape(MatrixError): pass


class DimensionMismatch(MatrixError): pass


class NotSquareMatrix(MatrixError): pass


class MatrixIndexError(MatrixError, IndexError): pass
