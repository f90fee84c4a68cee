"""
Tests for configs, the serialisation capability, the action space and the
state encoder.
"""

import numpy as np
import pytest

from config import EnvConfig, RunConfig
from ftn import ActionSpace, Action, FruitTreeNavigation, InvalidConfiguration, State, StateEncoder, has_serialize


class TestEnvConfig:
    def test_defaults(self) -> None:
        cfg = EnvConfig()
        cfg.validate()
        assert (cfg.max_steps, cfg.depth) == (500, 6)

    @pytest.mark.parametrize("cfg", [EnvConfig(depth=4), EnvConfig(max_steps=-3)])
    def test_invalid(self, cfg: EnvConfig) -> None:
        with pytest.raises(InvalidConfiguration):
            cfg.validate()

    def test_from_config(self) -> None:
        env = FruitTreeNavigation.from_config(EnvConfig(max_steps=7, depth=7))
        assert env.max_steps == 7
        assert env.depth == 7

    def test_uniform_weights(self) -> None:
        assert RunConfig().resolved_weights() == pytest.approx((1.0 / 6,) * 6)


class TestSerializable:
    def test_declared_types(self) -> None:
        assert has_serialize(State)
        assert has_serialize(State(2, 1))
        assert has_serialize(EnvConfig())
        assert not has_serialize(RunConfig())
        assert not has_serialize(3)

    def test_state_dict(self) -> None:
        assert State(2, 1).to_dict() == {"row": 2, "column": 1}
        assert State.from_dict({"row": 3, "column": 2}) == State(3, 2)

    def test_env_config_dict(self) -> None:
        assert EnvConfig.from_dict(EnvConfig(max_steps=0, depth=5).to_dict()) == EnvConfig(0, 5)


class TestActionSpace:
    def test_decode(self) -> None:
        space = ActionSpace()
        assert space.size() == 2
        assert space.decode(0) is Action.LEFT
        assert space.decode(1) is Action.RIGHT

    def test_decode_out_of_range(self) -> None:
        with pytest.raises(IndexError):
            ActionSpace().decode(2)

    def test_admissible(self) -> None:
        space = ActionSpace()
        assert space.admissible(State(3, 1), depth=5) == [0, 1]
        assert space.admissible(State(5, 1), depth=5) == []


class TestStateEncoder:
    def test_encode(self) -> None:
        enc = StateEncoder(depth=6)
        assert enc.obs_dim() == 2
        obs = enc.encode(State(3, 4))
        assert obs.dtype == np.float32
        np.testing.assert_allclose(obs, [0.5, 0.5])
        np.testing.assert_array_equal(enc.encode(State(0, 0)), [0.0, 0.0])

    def test_encode_index(self) -> None:
        enc = StateEncoder(depth=5)
        assert enc.encode_index(State(0, 0)) == 0
        assert enc.encode_index(State(1, 1)) == 2
        assert enc.encode_index(State(2, 0)) == 3
        assert enc.n_nodes() == 63

    def test_state_array(self) -> None:
        np.testing.assert_array_equal(State(4, 3).as_array(), [4.0, 3.0])
