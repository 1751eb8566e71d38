from .data import make_correlated_data
from .prox_funcs import ST_vec, value_L1
from .sparse_ops import ColumnSparseBuilder
from .spectral import spectral_radius, check_spectral_radius, SPRAD_FLOOR


__all__ = [
    "make_correlated_data", "ST_vec", "value_L1", "ColumnSparseBuilder",
    "spectral_radius", "check_spectral_radius", "SPRAD_FLOOR",
]
