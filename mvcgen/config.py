"""mvcgen configuration.

Typed settings for a generator run that are not part of the project schema:
where projects are written, the database settings rendered into
``config/database.php``, and the version constraints placed in the
generated files.  All settings use Pydantic v2 models so they can be
validated at construction time and serialised to/from JSON or environment
variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    """Connection settings written into the generated ``config/database.php``.

    The defaults are placeholders; users are expected to edit the generated
    file (the README says so).
    """

    host: str = Field(default="localhost")
    database: str = Field(default="your_database_name")
    username: str = Field(default="root")
    password: str = Field(default="")
    charset: str = Field(default="utf8mb4")


class Config(BaseModel):
    """Global mvcgen configuration.

    Instances are typically created once by the CLI entry point (from the
    environment or a saved JSON file) and handed to ``ProjectGenerator``.
    """

    output_dir: Path = Field(default=Path("."))
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    php_version: str = Field(default=">=8.0", description="composer.json PHP constraint")
    bootstrap_version: str = Field(default="5.3.0", description="Bootstrap CDN version for views")

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file.  Parent directories are created.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            MVCGEN_OUTPUT_DIR, MVCGEN_DB_HOST, MVCGEN_DB_NAME,
            MVCGEN_DB_USER, MVCGEN_DB_PASSWORD, MVCGEN_DB_CHARSET.
        """
        db_kwargs: dict[str, Any] = {}
        env_map = {
            "MVCGEN_DB_HOST": "host",
            "MVCGEN_DB_NAME": "database",
            "MVCGEN_DB_USER": "username",
            "MVCGEN_DB_PASSWORD": "password",
            "MVCGEN_DB_CHARSET": "charset",
        }
        for var, key in env_map.items():
            # An empty password is a legitimate value, so test presence.
            if var in os.environ:
                db_kwargs[key] = os.environ[var]

        kwargs: dict[str, Any] = {"database": DatabaseConfig(**db_kwargs)}
        if os.environ.get("MVCGEN_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["MVCGEN_OUTPUT_DIR"])

        return cls(**kwargs)
