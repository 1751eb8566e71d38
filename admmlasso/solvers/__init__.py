from .base import BaseADMM
from .admm_lasso import ADMMLasso


__all__ = ["BaseADMM", "ADMMLasso"]
