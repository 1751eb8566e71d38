import numpy as np
from scipy import sparse


class ColumnSparseBuilder:
    """Build a CSC matrix column by column.

    Columns are written in increasing order from dense vectors. Storage for
    ``nnz_per_col`` entries per column is reserved upfront and grown when a
    column holds more non zeros. Only non zero entries are stored.

    Parameters
    ----------
    n_rows : int
        Number of rows of the matrix.

    n_cols : int
        Number of columns of the matrix.

    nnz_per_col : int, optional
        Expected number of non zeros per column. Defaults to ``n_rows``.

    Examples
    --------
    >>> builder = ColumnSparseBuilder(3, 2)
    >>> builder.set_column(0, np.array([1., 0., 2.]))
    >>> builder.set_column(1, np.array([0., 0., 3.]))
    >>> builder.tocsc().toarray()
    array([[1., 0.],
           [0., 0.],
           [2., 3.]])
    """

    def __init__(self, n_rows, n_cols, nnz_per_col=None):
        if nnz_per_col is None:
            nnz_per_col = n_rows
        self.n_rows = n_rows
        self.n_cols = n_cols
        capacity = max(n_cols * min(nnz_per_col, n_rows), 1)

        self._data = np.zeros(capacity)
        self._indices = np.zeros(capacity, dtype=np.int32)
        self._indptr = np.zeros(n_cols + 1, dtype=np.int32)
        self._next_col = 0

    @property
    def nnz(self):
        return self._indptr[self._next_col]

    def set_column(self, col, values):
        """Write the non zero entries of dense vector ``values`` in column ``col``.

        Parameters
        ----------
        col : int
            Index of the column. Must be the next unwritten column.

        values : array, shape (n_rows,)
            Dense content of the column.
        """
        if col != self._next_col:
            raise ValueError(
                "Columns must be written in order: expected column %d, got %d."
                % (self._next_col, col))
        if values.shape != (self.n_rows,):
            raise ValueError("Expected a column of shape (%d,), got %s."
                             % (self.n_rows, values.shape))

        rows = np.flatnonzero(values)
        start = self._indptr[col]
        stop = start + len(rows)
        if stop > len(self._data):
            self._grow(stop)

        self._indices[start:stop] = rows
        self._data[start:stop] = values[rows]
        self._indptr[col + 1] = stop
        self._next_col += 1

    def tocsc(self):
        """Return the assembled matrix, trimmed to its non zeros.

        Unwritten trailing columns are empty.
        """
        self._indptr[self._next_col + 1:] = self._indptr[self._next_col]
        nnz = self.nnz
        return sparse.csc_matrix(
            (self._data[:nnz].copy(), self._indices[:nnz].copy(),
             self._indptr.copy()),
            shape=(self.n_rows, self.n_cols))

    def _grow(self, min_capacity):
        capacity = max(min_capacity, 2 * len(self._data))
        data = np.zeros(capacity)
        indices = np.zeros(capacity, dtype=np.int32)
        data[:len(self._data)] = self._data
        indices[:len(self._indices)] = self._indices
        self._data, self._indices = data, indices
