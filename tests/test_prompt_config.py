"""Tests for the prompt configuration store."""

import pytest
from pydantic import ValidationError

from tenant_research.domain.schemas import PromptConfig, PromptConfigUpdate
from tenant_research.services.prompt_config import PromptConfigStore


@pytest.fixture
def store():
    return PromptConfigStore()


class TestPromptConfigStore:
    def test_defaults(self, store):
        config = store.get()
        assert config.result_count == 20
        assert config.search_radius_miles == 100
        assert "Amazon" in config.exclude_companies

    def test_get_returns_copy(self, store):
        config = store.get()
        config.exclude_companies.append("Target")
        config.result_count = 3
        assert "Target" not in store.get().exclude_companies
        assert store.get().result_count == 20

    def test_partial_update_keeps_other_fields(self, store):
        updated = store.replace(PromptConfigUpdate(result_count=35, tone="concise"))

        assert updated.result_count == 35
        assert updated.tone == "concise"
        assert updated.search_radius_miles == 100
        assert store.get().result_count == 35

    def test_explicit_null_is_ignored(self, store):
        store.replace(PromptConfigUpdate.model_validate({"result_count": None, "search_radius_miles": 50}))
        assert store.get().result_count == 20
        assert store.get().search_radius_miles == 50

    @pytest.mark.parametrize("count", [0, 51, -4])
    def test_invalid_result_count_rejected(self, store, count):
        store.replace(PromptConfigUpdate(tone="warm"))

        with pytest.raises(ValidationError):
            store.replace(PromptConfigUpdate(result_count=count, tone="cold"))

        assert store.get().result_count == 20
        assert store.get().tone == "warm"

    def test_invalid_radius_rejected(self, store):
        with pytest.raises(ValidationError):
            store.replace(PromptConfigUpdate(search_radius_miles=0))

    def test_snapshot_unaffected_by_later_update(self, store):
        snapshot = store.get()
        store.replace(PromptConfigUpdate(result_count=10))
        assert snapshot.result_count == 20

    def test_reset(self, store):
        store.replace(PromptConfigUpdate(result_count=10, exclude_companies=["Acme"]))
        config = store.reset()
        assert config == PromptConfig()
        assert store.get().exclude_companies == PromptConfig().exclude_companies

    def test_initial_config(self):
        store = PromptConfigStore(PromptConfig(result_count=7))
        assert store.get().result_count == 7
