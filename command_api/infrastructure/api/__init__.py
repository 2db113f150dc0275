from .router import router, get_repository, get_command_handler
from .auth import TokenAuthorizer, require_authorization
from .error_handlers import register_exception_handlers
from .middleware import log_requests

__all__ = [
    "router",
    "get_repository",
    "get_command_handler",
    "TokenAuthorizer",
    "require_authorization",
    "register_exception_handlers",
    "log_requests"
]
