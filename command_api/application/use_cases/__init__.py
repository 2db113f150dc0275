from .command_handler import CommandHandler

__all__ = ["CommandHandler"]
