from models.users import User, UserRole
from models.weapon import Weapon
from models.enhancement_attempt import EnhancementAttempt, EnhancementOutcome
from models.battle import Battle
from models.currency_transaction import CurrencyTransaction, LedgerReason
from models.check_in import CheckIn

__all__ = [
    "User", "UserRole",
    "Weapon",
    "EnhancementAttempt", "EnhancementOutcome",
    "Battle",
    "CurrencyTransaction", "LedgerReason",
    "CheckIn",
]
