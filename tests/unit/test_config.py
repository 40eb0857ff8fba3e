"""Tests for environment-driven settings."""

from collections.abc import Iterator

import pytest
from pydantic import ValidationError

from bipgraph.config import GraphSettings, get_settings
from bipgraph.core.graph import BipartiteGraph


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Start every test without bipgraph variables and an empty settings cache."""
    monkeypatch.delenv("BIPGRAPH_CHECK_DUPLICATES", raising=False)
    monkeypatch.delenv("BIPGRAPH_VERIFY_INVARIANT", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestFromEnv:
    """Tests for reading settings from the environment."""

    def test_defaults(self) -> None:
        settings = GraphSettings.from_env()
        assert settings.check_duplicates is True
        assert settings.verify_invariant is False

    def test_disable_duplicate_check(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BIPGRAPH_CHECK_DUPLICATES", "false")
        settings = GraphSettings.from_env()
        assert settings.check_duplicates is False
        graph = BipartiteGraph(1, 1, [(0, 0), (0, 0)], settings=settings)
        assert graph.num_edges == 2

    @pytest.mark.parametrize("value", ["1", "true", "yes", "on"])
    def test_enable_verify_invariant(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.setenv("BIPGRAPH_VERIFY_INVARIANT", value)
        assert GraphSettings.from_env().verify_invariant is True

    @pytest.mark.parametrize("name", ["BIPGRAPH_CHECK_DUPLICATES", "BIPGRAPH_VERIFY_INVARIANT"])
    def test_typo_raises(self, monkeypatch: pytest.MonkeyPatch, name: str) -> None:
        monkeypatch.setenv(name, "ture")
        with pytest.raises(ValidationError):
            GraphSettings.from_env()

    def test_explicit_values_override_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BIPGRAPH_CHECK_DUPLICATES", "0")
        assert GraphSettings(check_duplicates=True).check_duplicates is True


class TestGetSettings:
    """Tests for the cached process-wide settings."""

    def test_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_cache_clear_rereads_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        first = get_settings()
        assert first.check_duplicates is True

        monkeypatch.setenv("BIPGRAPH_CHECK_DUPLICATES", "no")
        assert get_settings() is first

        get_settings.cache_clear()
        second = get_settings()
        assert second is not first
        assert second.check_duplicates is False

    def test_default_for_new_graphs(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BIPGRAPH_CHECK_DUPLICATES", "off")
        graph = BipartiteGraph(1, 1, [(0, 0), (0, 0)])
        assert graph.settings is get_settings()
        assert graph.num_edges == 2

    def test_typo_in_env_fails_graph_creation(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BIPGRAPH_CHECK_DUPLICATES", "ture")
        with pytest.raises(ValidationError):
            BipartiteGraph(1, 1, [(0, 0), (0, 0)])


class TestFrozen:
    """Tests that shared settings cannot be changed in place."""

    def test_assignment_rejected(self) -> None:
        settings = get_settings()
        with pytest.raises(ValidationError):
            settings.check_duplicates = False  # type: ignore[misc]
        assert get_settings().check_duplicates is True

    def test_graphs_share_unchanged_defaults(self) -> None:
        first = BipartiteGraph()
        second = BipartiteGraph()
        assert first.settings is second.settings
        assert first.settings == GraphSettings()
