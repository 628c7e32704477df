"""Settings for the genealogy store, read from ``GENEALOGY_*`` env vars.

Priority chain (highest to lowest):
  1. Init kwargs
  2. Env vars (``GENEALOGY_*`` prefix)
  3. Code defaults
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GenealogySettings(BaseSettings):
    """Frozen settings object shared by a store and its logging setup.

    Attributes:
        verbose: Emit the store's DEBUG events.
        log_json: Render log lines as JSON instead of console text.
        validate_payload_ids: Check that every payload built by the
            payload factory reports the identifier it was built for.
    """

    model_config = SettingsConfigDict(
        env_prefix="GENEALOGY_",
        frozen=True,
        extra="ignore",
    )

    verbose: bool = False
    log_json: bool = False
    validate_payload_ids: bool = Field(default=True)
