"""Runtime settings for bipgraph."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GraphSettings(BaseSettings):
    """Defaults applied by every BipartiteGraph that is not given its own.

    Environment variables are prefixed with BIPGRAPH_. Values that do not
    parse as booleans raise a validation error. Instances are frozen, since
    the cached default is shared by every graph.

    Attributes
    ----------
    check_duplicates:
        Whether bulk construction skips edges that are already present.
        Unchecked construction is faster but keeps duplicate edges, so it
        should only be turned off when the input is known to be unique.
    verify_invariant:
        Run the full dual cross-reference check after every mutation. Costs
        O(V + E) per call and is meant for debugging and tests.
    """

    model_config = SettingsConfigDict(env_prefix="BIPGRAPH_", extra="ignore", frozen=True)

    check_duplicates: bool = Field(default=True, description="Skip duplicate edges")
    verify_invariant: bool = Field(default=False, description="Check after each mutation")

    @classmethod
    def from_env(cls) -> GraphSettings:
        """Read ``BIPGRAPH_CHECK_DUPLICATES`` and ``BIPGRAPH_VERIFY_INVARIANT``."""
        return cls()


@lru_cache(maxsize=1)
def get_settings() -> GraphSettings:
    """Process-wide settings, read from the environment on first use."""
    return GraphSettings.from_env()
