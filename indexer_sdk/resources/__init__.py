from .actions import ActionsResource

__all__ = ["ActionsResource"]
