# backend/app/core/tutorial/__init__.py
from .repository import TutorialRepository
from .service import TutorialNotFound, TutorialService, TutorialValidationError, build_service
from .settings import TutorialSettings, load_settings

__all__ = [
    'TutorialRepository',
    'TutorialService',
    'TutorialNotFound',
    'TutorialValidationError',
    'TutorialSettings',
    'build_service',
    'load_settings',
]
