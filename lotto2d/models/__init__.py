"""
Last-Two-Digit Probability Models

Available models:
- posterior: Dirichlet-multinomial posterior and day/month shrinkage
- markov_chain: First-order 100x100 Markov transition model
- fusion: Log-linear (weighted geometric) fusion of component distributions
"""

from . import posterior
from . import markov_chain
from . import fusion

__all__ = [
    "posterior",
    "markov_chain",
    "fusion",
]
