"""
Unit Tests for Build Configuration
==================================
"""
from pathlib import Path

import pytest

from pathway_bn.config import BuildConfig, GeneratorOverride, load_config
from pathway_bn.factors import RepressorDominatesVoteFactorGenerator

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


class TestBuildConfig:
    """Test BuildConfig"""

    def test_epsilon_required(self):
        """Test a missing epsilon is rejected"""
        config = BuildConfig(pathway_file="p.tab")
        with pytest.raises(ValueError, match="epsilon"):
            config.validate()

    def test_pathway_required(self):
        """Test a missing pathway file is rejected"""
        with pytest.raises(ValueError, match="pathway_file"):
            BuildConfig(epsilon=0.01).validate()

    def test_epsilon_range(self):
        """Test epsilon outside [0, 1) is rejected"""
        with pytest.raises(ValueError):
            BuildConfig(pathway_file="p.tab", epsilon=1.5).validate()

    def test_string_epsilon_coerced(self):
        """Test numeric strings are accepted as epsilon"""
        config = BuildConfig(
            pathway_file="p.tab",
            epsilon="0.01",
            generators=[GeneratorOverride("protein", "mRNA", "0.2")],
        )
        config.validate()
        assert config.epsilon == 0.01
        assert config.generators[0].epsilon == 0.2

    @pytest.mark.parametrize("epsilon", ["small", [0.1]])
    def test_non_numeric_epsilon(self, epsilon):
        """Test a non-numeric epsilon is a ValueError"""
        with pytest.raises(ValueError, match="epsilon"):
            BuildConfig(pathway_file="p.tab", epsilon=epsilon).validate()

    def test_build_registry(self):
        """Test the registry carries the default and overrides"""
        config = BuildConfig(
            pathway_file="p.tab",
            epsilon=0.01,
            generators=[GeneratorOverride("protein", "mRNA", 0.2)],
        )
        registry = config.build_registry()
        assert isinstance(registry.default, RepressorDominatesVoteFactorGenerator)
        assert registry.default.epsilon == 0.01
        assert registry.lookup("protein", "mRNA").epsilon == 0.2

    def test_update_ignores_unknown(self):
        """Test unknown keys are ignored"""
        config = BuildConfig()
        config.update({"epsilon": 0.05, "not_a_setting": 1})
        assert config.epsilon == 0.05
        assert not hasattr(config, "not_a_setting")

    @pytest.mark.parametrize("override", [{"entity_type": "protein"}, "protein/mRNA"])
    def test_update_bad_generator(self, override):
        """Test malformed generator overrides are a ValueError"""
        with pytest.raises(ValueError, match="generator override"):
            BuildConfig().update({"generators": [override]})


class TestLoadConfig:
    """Test YAML loading"""

    def test_load_fixture(self):
        """Test loading the fixture configuration"""
        config = load_config(FIXTURES_DIR / "build.yaml")
        assert config.epsilon == 0.001
        assert config.node_map_prefix == "id "
        assert Path(config.pathway_file) == FIXTURES_DIR / "signaling.tab"
        assert Path(config.em_steps_file) == FIXTURES_DIR / "em_steps.yaml"
        assert config.generators == [GeneratorOverride("protein", "mRNA", 0.01)]

    def test_load_missing(self, tmp_path):
        """Test a missing configuration file"""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_load_invalid_yaml(self, tmp_path):
        """Test unparsable YAML is a ValueError"""
        path = tmp_path / "build.yaml"
        path.write_text("epsilon: [0.1\n")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(path)

    def test_save_and_reload(self, tmp_path):
        """Test a saved configuration reloads unchanged"""
        config = BuildConfig(
            pathway_file=str(tmp_path / "p.tab"),
            epsilon=0.02,
            generators=[GeneratorOverride("protein", "active", 0.1)],
        )
        path = tmp_path / "out" / "build.yaml"
        config.save_to_yaml(path)

        reloaded = load_config(path)
        assert reloaded.pathway_file == config.pathway_file
        assert reloaded.epsilon == 0.02
        assert reloaded.generators == config.generators
