"""Authentication bundle.

When a project enables authentication this adds a ``User`` entity and
repository (rendered through the regular model and repository generators
with templates that extend the defaults), an ``AuthController`` whose
login/register/logout bodies follow the project's handler variant, the
session and access-gate helpers, and, with views, the login and register
pages.
"""

from __future__ import annotations

from .controller_gen import HandlerVariant
from .model_gen import ModelGenerator
from .models import EntitySpec, FieldSpec, FieldType, GeneratedArtifact, ProjectSpec
from .repository_gen import RepositoryGenerator
from .templates import TemplateRenderer


MIN_PASSWORD_LENGTH = 8

USER_FIELDS: list[FieldSpec] = [
    FieldSpec(name="email", type=FieldType.STRING),
    FieldSpec(name="password", type=FieldType.STRING),
    FieldSpec(name="name", type=FieldType.STRING),
    FieldSpec(name="createdAt", type=FieldType.DATETIME),
]

USER_ENTITY = EntitySpec(name="User", fields=USER_FIELDS)

AUTH_OPERATIONS: tuple[str, ...] = ("login", "register", "logout", "check")

# Operations whose body depends on the handler variant.
_VARIANT_OPERATIONS = frozenset({"login", "register", "logout"})


def auth_operation_templates(variant: HandlerVariant) -> dict[str, str]:
    return {
        operation: (
            f"auth/controller/{variant.value}/{operation}.php.j2"
            if operation in _VARIANT_OPERATIONS
            else f"auth/controller/{operation}.php.j2"
        )
        for operation in AUTH_OPERATIONS
    }


class AuthGenerator:
    """Composes the authentication bundle into a project."""

    def __init__(
        self,
        renderer: TemplateRenderer,
        model_gen: ModelGenerator,
        repository_gen: RepositoryGenerator,
    ) -> None:
        self.renderer = renderer
        self.model_gen = model_gen
        self.repository_gen = repository_gen

    def generate(self, project: ProjectSpec) -> list[GeneratedArtifact]:
        """Return every artifact of the bundle, in write order."""
        variant = HandlerVariant.for_project(project)
        artifacts = [
            self.model_gen.generate(USER_ENTITY, template="auth/User.php.j2"),
            self.repository_gen.generate(USER_ENTITY, template="auth/UserRepository.php.j2"),
            self.controller(variant),
            self.renderer.artifact("core/Session.php.j2", "src/Core/Session.php", {}),
            self.renderer.artifact(
                "core/AuthMiddleware.php.j2", "src/Core/AuthMiddleware.php", {}
            ),
        ]
        if project.with_presentation_views:
            context = {"min_password_length": MIN_PASSWORD_LENGTH}
            artifacts.append(
                self.renderer.artifact("auth/view/login.php.j2", "src/View/auth_login.php", context)
            )
            artifacts.append(
                self.renderer.artifact(
                    "auth/view/register.php.j2", "src/View/auth_register.php", context
                )
            )
        return artifacts

    def controller(self, variant: HandlerVariant) -> GeneratedArtifact:
        return self.renderer.artifact(
            "auth/controller/AuthController.php.j2",
            "src/Controller/AuthController.php",
            {
                "variant": variant.value,
                "operations": AUTH_OPERATIONS,
                "operation_templates": auth_operation_templates(variant),
                "min_password_length": MIN_PASSWORD_LENGTH,
            },
        )
