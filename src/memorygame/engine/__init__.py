"""Deterministic, headless rules engine for the memory game.

IMPORTANT: This package must never import pygame.
"""

from .actions import RestartAction, SelectCardAction, SetMatchesAction, TickAction
from .ports import NullPresenter, Presenter
from .session import ConfigurationError, GameSession, SessionConfig, StepResult, new_session, replay, step
from .timers import Scheduler
from .types import Card, VariantDefinition, VariantPool

__all__ = [
    "Card",
    "ConfigurationError",
    "GameSession",
    "NullPresenter",
    "Presenter",
    "RestartAction",
    "Scheduler",
    "SelectCardAction",
    "SessionConfig",
    "SetMatchesAction",
    "StepResult",
    "TickAction",
    "VariantDefinition",
    "VariantPool",
    "new_session",
    "replay",
    "step",
]
