"""Main scaffolding orchestrator.

Takes a ``ProjectSpec`` and generates a complete PHP MVC project directory:
core runtime, one entity/repository/controller per entity, optional views,
the optional authentication bundle, the route table and the SQL schema.

All artifacts are rendered in memory before anything touches the file
system; then the project root is created (failing if it already exists) and
the artifacts are written in a fixed order.  A write failure stops the run
and leaves the files written so far in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..config import Config
from ..utils import print_step
from .auth_gen import USER_FIELDS, AuthGenerator
from .controller_gen import ControllerGenerator
from .model_gen import ModelGenerator
from .models import GeneratedArtifact, ProjectSpec
from .repository_gen import RepositoryGenerator
from .routes_gen import RoutesGenerator
from .structure_gen import FIXED_DIRECTORIES, StructureGenerator
from .templates import TemplateRenderer
from .view_gen import ViewGenerator


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class GenerationError(Exception):
    """Base class for every failure of a generation run."""


class TargetExistsError(GenerationError):
    """The project directory already exists; nothing was written."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"The folder '{path}' already exists")


class ArtifactWriteError(GenerationError):
    """Writing a file or directory failed part-way through the run.

    The originating ``OSError`` is chained as ``__cause__``.  Files written
    before the failure are not removed.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Could not write '{path}': {reason}")


# ---------------------------------------------------------------------------
# Artifact groups
# ---------------------------------------------------------------------------


@dataclass
class ArtifactGroup:
    """Artifacts written together and reported as one progress line."""

    label: str
    artifacts: list[GeneratedArtifact] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Main scaffolding orchestrator.

    Given a ``ProjectSpec``, generates a directory tree containing:
    - composer.json, README, .gitignore and database settings
    - the core runtime (database, router, request/response helpers)
    - an entity, repository and controller per entity
    - listing pages, layout and theme when views are enabled
    - the user model, auth controller and session helpers when
      authentication is enabled
    - the route table and the SQL schema
    """

    def __init__(
        self,
        project: ProjectSpec,
        config: Config | None = None,
        *,
        verbose: bool = True,
    ) -> None:
        self.project = project
        self.config = config or Config()
        self.verbose = verbose
        self.renderer = TemplateRenderer()
        self.structure_gen = StructureGenerator(self.renderer, self.config)
        self.model_gen = ModelGenerator(self.renderer)
        self.repository_gen = RepositoryGenerator(self.renderer)
        self.controller_gen = ControllerGenerator(self.renderer)
        self.view_gen = ViewGenerator(self.renderer)
        self.routes_gen = RoutesGenerator(self.renderer)
        self.auth_gen = AuthGenerator(self.renderer, self.model_gen, self.repository_gen)

    # -- Public API --------------------------------------------------------

    def project_root(self, output_dir: str | Path | None = None) -> Path:
        base = Path(output_dir) if output_dir is not None else self.config.output_dir
        return base / self.project.project_name

    def build_artifacts(self) -> list[ArtifactGroup]:
        """Render every artifact, grouped and ordered as they will be written.

        Pure: the same project and configuration always produce the same
        groups with the same contents.
        """
        project = self.project
        per_entity: list[GeneratedArtifact] = []
        for entity in project.entities:
            per_entity.append(self.model_gen.generate(entity))
            per_entity.append(self.repository_gen.generate(entity))
            per_entity.append(self.controller_gen.generate(entity, project))

        groups = [
            ArtifactGroup("Project files", self.structure_gen.static_files(project)),
            ArtifactGroup("Core runtime", self.structure_gen.core_runtime()),
            ArtifactGroup("Per-entity classes", per_entity),
        ]

        if project.with_presentation_views:
            groups.append(
                ArtifactGroup(
                    "Views",
                    self.structure_gen.presentation_shell(project)
                    + [self.view_gen.generate(e) for e in project.entities],
                )
            )

        if project.with_authentication:
            groups.append(ArtifactGroup("Authentication", self.auth_gen.generate(project)))

        user_fields = USER_FIELDS if project.with_authentication else None
        groups.append(
            ArtifactGroup(
                "Routes and schema",
                [
                    self.routes_gen.generate(project),
                    self.structure_gen.schema(project, user_fields),
                ],
            )
        )
        return groups

    def generate(self, output_dir: str | Path | None = None) -> list[str]:
        """Generate the project under ``<output_dir>/<project_name>``.

        Args:
            output_dir: Parent directory.  Defaults to ``config.output_dir``.

        Returns:
            The relative paths of the generated files, in write order.

        Raises:
            TargetExistsError: The project directory already exists.
            ArtifactWriteError: A directory or file could not be written.
        """
        groups = self.build_artifacts()
        root = self.project_root(output_dir)

        # Creating the root is the existence check: no window between the two.
        try:
            root.mkdir(parents=True, exist_ok=False)
        except FileExistsError as exc:
            raise TargetExistsError(root) from exc
        except OSError as exc:
            raise ArtifactWriteError(root, exc.strerror or str(exc)) from exc

        for directory in FIXED_DIRECTORIES:
            path = root / directory
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise ArtifactWriteError(path, exc.strerror or str(exc)) from exc

        for group in groups:
            for artifact in group.artifacts:
                self._write(root, artifact)
            if self.verbose and group.artifacts:
                print_step(group.label, len(group.artifacts))

        return manifest(groups)

    # -- Internal helpers --------------------------------------------------

    @staticmethod
    def _write(root: Path, artifact: GeneratedArtifact) -> None:
        path = root / artifact.relative_path
        try:
            _write_file(path, artifact.content)
        except OSError as exc:
            raise ArtifactWriteError(path, exc.strerror or str(exc)) from exc


def manifest(groups: list[ArtifactGroup]) -> list[str]:
    """Relative paths of *groups* in write order, each listed once.

    A later artifact with the same path overwrites the earlier one on disk.
    """
    return list(
        dict.fromkeys(a.relative_path for group in groups for a in group.artifacts)
    )


def _write_file(path: Path, content: str) -> None:
    """Create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
