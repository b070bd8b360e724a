"""Git access layer: gateway, read-only inspector, constants and errors."""

from .git_gateway import GitGateway, GitResult
from .repo_state import BranchRelationship, FlowConfig, RepositoryStateInspector

__all__ = [
    "GitGateway",
    "GitResult",
    "BranchRelationship",
    "FlowConfig",
    "RepositoryStateInspector",
]
