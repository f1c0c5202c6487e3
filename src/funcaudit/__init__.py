"""funcaudit - static function usage and async/await consistency audit for JS/TS."""

__version__ = "0.1.0"

from funcaudit.application.services import AuditOutcome, AuditService
from funcaudit.domain.config import AuditConfig

__all__ = ["AuditConfig", "AuditOutcome", "AuditService", "__version__"]
