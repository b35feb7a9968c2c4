"""
Unit Tests for Configuration Module
====================================

Tests the EngineConfig dataclass and related configuration utilities:
- Default value verification
- Structural validation (types, finiteness, bounds)
- Serialization (to_dict/from_dict)
- Copy operations
"""

import dataclasses
import math

import pytest

from conceptgraph.config import EngineConfig, get_default_config
from conceptgraph.errors import ConfigurationError


# =============================================================================
# DEFAULT VALUE TESTS
# =============================================================================


class TestConfigDefaults:
    """Tests for default configuration values."""

    def test_invariant_defaults(self):
        """Defaults satisfy derived = base + buffer."""
        config = EngineConfig()
        assert config.base_value == 2.89
        assert config.derived_value == 2.99
        assert config.buffer_constant == 0.1
        assert abs(config.base_value + config.buffer_constant - config.derived_value) < 1e-9

    def test_rate_defaults(self):
        config = EngineConfig()
        assert config.rate == 0.1
        assert config.rate_min == 0.01
        assert config.rate_max == 0.1

    def test_behavior_defaults(self):
        config = EngineConfig()
        assert config.enforce_invariant is True
        assert config.strict is False
        assert config.personality_factor == 0.7
        assert config.merge_threshold == 0.4
        assert config.top_concepts == 5
        assert config.learn_strength is None

    def test_get_default_config_returns_new_instance(self):
        assert get_default_config() == EngineConfig()
        assert get_default_config() is not get_default_config()


# =============================================================================
# VALIDATION TESTS
# =============================================================================


class TestConfigValidation:
    """Structurally invalid values are rejected at construction."""

    def test_nan_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            EngineConfig(base_value=math.nan)
        assert exc_info.value.context['param'] == 'base_value'

    def test_infinity_rejected(self):
        with pytest.raises(ConfigurationError):
            EngineConfig(derived_value=math.inf)

    def test_bool_is_not_a_number(self):
        with pytest.raises(ConfigurationError):
            EngineConfig(base_value=True)

    def test_string_rejected(self):
        with pytest.raises(ConfigurationError):
            EngineConfig(rate="0.1")

    def test_negative_buffer_rejected(self):
        with pytest.raises(ConfigurationError):
            EngineConfig(buffer_constant=-0.1)

    def test_inverted_rate_bounds_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            EngineConfig(rate_min=0.5, rate_max=0.1)
        assert "rate_min" in str(exc_info.value)

    def test_out_of_bounds_rate_is_not_an_error(self):
        """Rate clamping is the enforcer's job, not construction's."""
        config = EngineConfig(rate=5.0)
        assert config.rate == 5.0

    def test_drifted_derived_value_is_not_an_error(self):
        config = EngineConfig(base_value=1.0, derived_value=9.0)
        assert config.derived_value == 9.0

    @pytest.mark.parametrize("value", [0.0, -0.5, 1.5])
    def test_personality_factor_bounds(self, value):
        with pytest.raises(ConfigurationError):
            EngineConfig(personality_factor=value)

    def test_personality_factor_one_allowed(self):
        assert EngineConfig(personality_factor=1.0).personality_factor == 1.0

    @pytest.mark.parametrize("value", [-0.1, 1.1])
    def test_merge_threshold_bounds(self, value):
        with pytest.raises(ConfigurationError):
            EngineConfig(merge_threshold=value)

    @pytest.mark.parametrize("value", [0, -1, 2.5])
    def test_top_concepts_must_be_positive_int(self, value):
        with pytest.raises(ConfigurationError):
            EngineConfig(top_concepts=value)

    def test_learn_strength_bounds(self):
        with pytest.raises(ConfigurationError):
            EngineConfig(learn_strength=1.5)
        assert EngineConfig(learn_strength=0.5).learn_strength == 0.5

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            EngineConfig(rate_min=1.0, rate_max=0.0)


# =============================================================================
# COPY AND SERIALIZATION TESTS
# =============================================================================


class TestConfigCopy:
    """Tests for copy and immutability."""

    def test_config_is_frozen(self):
        config = EngineConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.base_value = 1.0

    def test_copy_with_override(self):
        config = EngineConfig()
        stricter = config.copy(strict=True)
        assert stricter.strict is True
        assert config.strict is False

    def test_copy_unknown_field_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            EngineConfig().copy(nonexistent=1)
        assert exc_info.value.context['fields'] == ['nonexistent']

    def test_copy_revalidates(self):
        with pytest.raises(ConfigurationError):
            EngineConfig().copy(rate_min=0.5)


class TestConfigSerialization:
    """Tests for to_dict/from_dict."""

    def test_to_dict_contains_all_fields(self):
        data = EngineConfig().to_dict()
        assert set(data) == {f.name for f in dataclasses.fields(EngineConfig)}

    def test_from_dict_restores_values(self):
        original = EngineConfig(base_value=1.5, derived_value=1.6, strict=True, top_concepts=3)
        assert EngineConfig.from_dict(original.to_dict()) == original

    def test_from_dict_partial(self):
        config = EngineConfig.from_dict({'rate': 0.05})
        assert config.rate == 0.05
        assert config.base_value == 2.89

    def test_from_dict_unknown_key(self):
        with pytest.raises(ConfigurationError):
            EngineConfig.from_dict({'bogus': True})
