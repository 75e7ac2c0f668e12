"""
Unit tests for RankingConfig
"""

import pytest

from wikirank.catalog import DEFAULT_LANGS, LabelCatalog
from wikirank.config import RankingConfig


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("WIKIRANK_PARTITIONS", "WIKIRANK_WORKERS", "WIKIRANK_EXECUTOR",
                 "WIKIRANK_REDUCE_TASKS", "WIKIRANK_LANGS"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestRankingConfigDefaults:

    def test_defaults(self, clean_env):
        config = RankingConfig.from_env()
        assert config.num_partitions >= 1
        assert config.max_workers >= 1
        assert config.executor == "thread"
        assert config.num_reduce_tasks is None
        assert list(config.catalog) == list(DEFAULT_LANGS)


class TestRankingConfigEnvironment:
    """Environment variables override defaults"""

    def test_env_overrides(self, clean_env):
        clean_env.setenv("WIKIRANK_PARTITIONS", "6")
        clean_env.setenv("WIKIRANK_WORKERS", "3")
        clean_env.setenv("WIKIRANK_EXECUTOR", "process")
        clean_env.setenv("WIKIRANK_REDUCE_TASKS", "2")
        clean_env.setenv("WIKIRANK_LANGS", "Go,Rust")

        config = RankingConfig.from_env()

        assert config.num_partitions == 6
        assert config.max_workers == 3
        assert config.executor == "process"
        assert config.num_reduce_tasks == 2
        assert config.catalog == LabelCatalog(["Go", "Rust"])

    def test_non_integer_env_value_raises(self, clean_env):
        clean_env.setenv("WIKIRANK_PARTITIONS", "many")
        with pytest.raises(ValueError, match="WIKIRANK_PARTITIONS"):
            RankingConfig.from_env()

    def test_unknown_executor_raises(self, clean_env):
        clean_env.setenv("WIKIRANK_EXECUTOR", "cluster")
        with pytest.raises(ValueError, match="executor"):
            RankingConfig.from_env()


class TestRankingConfigOverrides:
    """Explicit overrides win over the environment"""

    def test_overrides_replace_env_values(self, clean_env):
        clean_env.setenv("WIKIRANK_PARTITIONS", "6")
        config = RankingConfig.from_env().with_overrides(num_partitions=2)
        assert config.num_partitions == 2

    def test_none_overrides_are_ignored(self, clean_env):
        clean_env.setenv("WIKIRANK_WORKERS", "5")
        config = RankingConfig.from_env().with_overrides(max_workers=None, executor=None)
        assert config.max_workers == 5
        assert config.executor == "thread"

    @pytest.mark.parametrize("field, value", [
        ("num_partitions", 0),
        ("max_workers", -1),
        ("num_reduce_tasks", 0),
    ])
    def test_invalid_values_rejected(self, clean_env, field, value):
        with pytest.raises(ValueError):
            RankingConfig().with_overrides(**{field: value})
