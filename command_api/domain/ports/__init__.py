from .repositories import CommandRepository

__all__ = ["CommandRepository"]
