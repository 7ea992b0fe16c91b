"""Runtime-tunable discovery and scoring parameters.

The store holds a single ``PromptConfig``. Readers get a deep copy, so an
analysis keeps the snapshot it started with even if the config is replaced
mid-run. Updates are validated in full before the swap.
"""

import logging
from functools import lru_cache

from tenant_research.domain.schemas import PromptConfig, PromptConfigUpdate

logger = logging.getLogger(__name__)


class PromptConfigStore:
    def __init__(self, initial: PromptConfig | None = None):
        self._config = initial.model_copy(deep=True) if initial else PromptConfig()

    def get(self) -> PromptConfig:
        return self._config.model_copy(deep=True)

    def replace(self, updates: PromptConfigUpdate) -> PromptConfig:
        """Apply a partial update and swap in the result.

        Raises:
            pydantic.ValidationError: the merged config is invalid
                (e.g. ``result_count`` outside 1-50); the stored config
                is left unchanged.
        """
        changes = updates.model_dump(exclude_unset=True, exclude_none=True)
        merged = PromptConfig.model_validate({**self._config.model_dump(), **changes})
        self._config = merged
        logger.info("Prompt configuration updated: %s", sorted(changes))
        return self.get()

    def reset(self) -> PromptConfig:
        self._config = PromptConfig()
        logger.info("Prompt configuration reset to defaults")
        return self.get()


@lru_cache
def get_prompt_config_store() -> PromptConfigStore:
    """Return the process-wide configuration store."""
    return PromptConfigStore()
