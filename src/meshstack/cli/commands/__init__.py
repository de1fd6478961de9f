"""CLI command modules.

Commands are grouped by what they act on:
- project: init, validate, generate (service / ci)
- infra: install, update, bootstrap
- services: deploy, destroy, status
- plan: read-only previews of the operations above
"""

from .infra import bootstrap, install, update
from .plan import plan_app
from .project import generate_app, init, validate
from .services import deploy, destroy, status

__all__ = [
    "bootstrap",
    "deploy",
    "destroy",
    "generate_app",
    "init",
    "install",
    "plan_app",
    "status",
    "update",
    "validate",
]
