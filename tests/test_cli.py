import argparse

import pytest

from lotto2d.cli import add_model_arguments, config_from_args
from lotto2d.config import resolve_config
from lotto2d.errors import ConfigError


def _parser():
    parser = argparse.ArgumentParser()
    parser.add_argument("--bt-last", dest="bt_last", type=int, default=None)
    return add_model_arguments(parser)


def test_unset_flags_fall_back_to_defaults():
    args = _parser().parse_args([])
    cfg = resolve_config(config_from_args(args, ("bt_last", "weights", "alpha", "k", "epsilon")))
    assert cfg["bt_last"] == 40
    assert cfg["weights"] == (0.5, 1.0, 0.5, 1.0)


def test_flags_flow_into_config():
    args = _parser().parse_args(["--weights", "1,1,1,1", "--alpha", "2", "--bt-last", "7"])
    cfg = resolve_config(config_from_args(args, ("bt_last", "weights", "alpha")))
    assert cfg["weights"] == (1.0, 1.0, 1.0, 1.0)
    assert cfg["alpha"] == 2.0
    assert cfg["bt_last"] == 7


def test_bad_weights_flag_is_rejected():
    args = _parser().parse_args(["--weights", "1,1"])
    with pytest.raises(ConfigError):
        resolve_config(config_from_args(args, ("weights",)))
