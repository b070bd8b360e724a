"""Branch lifecycle: init, feature and release state machines."""

from .initializer import InitOptions, InitResult, LifecycleInitializer
from .lifecycle import FeatureLifecycle, FinishOptions, SupportingBranchLifecycle
from .models import (
    BranchCategory,
    BranchState,
    FinishAction,
    FinishResult,
    ListEntry,
    StartResult,
    SupportingBranch,
)
from .release import ReleaseLifecycle

__all__ = [
    "BranchCategory",
    "BranchState",
    "FeatureLifecycle",
    "FinishAction",
    "FinishOptions",
    "FinishResult",
    "InitOptions",
    "InitResult",
    "LifecycleInitializer",
    "ListEntry",
    "ReleaseLifecycle",
    "StartResult",
    "SupportingBranch",
    "SupportingBranchLifecycle",
]
