from .command_mapper import to_read_dto, from_create_dto, apply_update_dto, to_update_dto

__all__ = ["to_read_dto", "from_create_dto", "apply_update_dto", "to_update_dto"]
