from .activation.activation_service import ActivationService
from .reminder.reminder_service import ReminderService
from .token_lifecycle import TokenLifecycle

__all__ = ["ActivationService", "ReminderService", "TokenLifecycle"]
