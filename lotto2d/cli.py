"""Command-line flags shared by the scripts in scripts/."""
import argparse

from lotto2d.config import DEFAULT_CONFIG


def add_model_arguments(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """Model flags; unset flags stay None so `resolve_config` fills defaults."""
    w = ",".join(str(x) for x in DEFAULT_CONFIG["weights"])
    parser.add_argument("--weights", type=str, default=None,
                        help=f"base,day,month,markov exponents (default {w})")
    parser.add_argument("--alpha", type=float, default=None,
                        help=f"Dirichlet prior strength (default {DEFAULT_CONFIG['alpha']})")
    parser.add_argument("--k", type=float, default=None,
                        help=f"shrinkage half-trust sample size (default {DEFAULT_CONFIG['k']})")
    parser.add_argument("--epsilon", type=float, default=None,
                        help=f"Markov prior strength (default {DEFAULT_CONFIG['epsilon']})")
    parser.add_argument("--history", type=str, default=None,
                        help="path to history.json (default DATA_DIR/history.json)")
    return parser


def config_from_args(args: argparse.Namespace, keys) -> dict:
    """Collect the given config keys from parsed arguments."""
    return {key: getattr(args, key) for key in keys if hasattr(args, key)}
