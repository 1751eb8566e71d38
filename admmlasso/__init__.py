__version__ = '0.1dev'

from admmlasso.estimators import LassoADMM  # noqa F401
from admmlasso.path import admm_lasso_path  # noqa F401
from admmlasso.solvers import ADMMLasso  # noqa F401
from admmlasso.standardization import DataStandardizer  # noqa F401
from admmlasso.exceptions import (  # noqa F401
    InvalidConfig, InvalidDimension, NumericDegeneracy
)
