"""
Thai Lottery Last-Two-Digit Posterior Estimator

Estimates a posterior distribution over the 100 possible two-digit outcomes
(00-99) of the next draw and evaluates it with a walk-forward backtest.

Modules:
- scraper: fetch draw results and load the local history file
- models: Dirichlet posterior, seasonal shrinkage, Markov chain, log-linear fusion
- analysis: significance testing against the uniform null (BH-FDR)
- predictor: single analysis for the next draw
- backtester: expanding-window backtest
"""

__version__ = "1.0.0"
