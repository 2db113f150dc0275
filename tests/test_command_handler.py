import pytest
from concurrent.futures import ThreadPoolExecutor

from command_api.domain import (
    Command,
    CommandNotFoundException,
    CommandValidationException,
    PatchOperationException,
    ErrorCode
)
from command_api.application import (
    CommandHandler,
    CommandCreateDto,
    CommandReadDto,
    CommandUpdateDto,
    PatchOperation
)
from command_api.application.mappers import (
    apply_update_dto,
    from_create_dto,
    to_read_dto,
    to_update_dto
)
from command_api.application.patching import apply_patch, validate_update
from command_api.infrastructure.adapters import InMemoryCommandRepository


def _migration_command() -> Command:
    return Command(
        id=0,
        how_to="How to generate a migration",
        platform=".NET Core EF"
    )


class TestCommandMapper:
    def test_to_read_dto_copies_every_field(self):
        command = Command(id=7, how_to="List files", platform="Linux", command_line="ls -la")

        dto = to_read_dto(command)

        assert dto == CommandReadDto(id=7, how_to="List files", platform="Linux", command_line="ls -la")
        assert dto.model_dump(by_alias=True) == {
            "id": 7,
            "howTo": "List files",
            "platform": "Linux",
            "commandLine": "ls -la"
        }

    def test_from_create_dto_leaves_id_unset(self):
        dto = CommandCreateDto(how_to="List files", platform="Linux", command_line="ls")

        command = from_create_dto(dto)

        assert command.id is None
        assert command.how_to == "List files"
        assert command.platform == "Linux"
        assert command.command_line == "ls"

    def test_apply_update_dto_overwrites_mutable_fields_only(self):
        command = Command(id=3, how_to="old", platform="old", command_line="old")
        dto = CommandUpdateDto(how_to="new", platform="Windows")

        apply_update_dto(dto, command)

        assert command.id == 3
        assert command.how_to == "new"
        assert command.platform == "Windows"
        assert command.command_line is None

    def test_to_update_dto_projects_entity(self):
        dto = to_update_dto(Command(id=3, how_to="Clone", platform="git", command_line="git clone"))

        assert dto.model_dump(by_alias=True) == {
            "howTo": "Clone",
            "platform": "git",
            "commandLine": "git clone"
        }


class TestPatchApplier:
    def _document(self) -> dict:
        return {"howTo": "Clone", "platform": "git", "commandLine": "git clone"}

    def test_replace_changes_only_target_field(self):
        patched = apply_patch(
            self._document(),
            [PatchOperation(op="replace", path="/howTo", value="Clone a repository")]
        )

        assert patched == {"howTo": "Clone a repository", "platform": "git", "commandLine": "git clone"}

    def test_operations_apply_in_order(self):
        patched = apply_patch(self._document(), [
            PatchOperation(op="replace", path="/commandLine", value="git clone --depth 1"),
            PatchOperation(op="test", path="/commandLine", value="git clone --depth 1"),
            PatchOperation(op="copy", from_="/platform", path="/howTo")
        ])

        assert patched == {"howTo": "git", "platform": "git", "commandLine": "git clone --depth 1"}

    def test_path_is_case_insensitive(self):
        patched = apply_patch(
            self._document(),
            [PatchOperation(op="Replace", path="/HOWTO", value="Shallow clone")]
        )

        assert patched["howTo"] == "Shallow clone"

    def test_remove_resets_field_to_none(self):
        patched = apply_patch(self._document(), [PatchOperation(op="remove", path="/commandLine")])

        assert patched["commandLine"] is None

    def test_move_clears_source(self):
        patched = apply_patch(self._document(), [
            PatchOperation(op="move", from_="/commandLine", path="/howTo")
        ])

        assert patched["howTo"] == "git clone"
        assert patched["commandLine"] is None

    def test_input_document_is_not_mutated(self):
        document = self._document()

        apply_patch(document, [PatchOperation(op="replace", path="/platform", value="hg")])

        assert document == self._document()

    def test_unknown_path_is_rejected(self):
        with pytest.raises(PatchOperationException) as exc_info:
            apply_patch(self._document(), [PatchOperation(op="replace", path="/id", value=5)])

        assert exc_info.value.error.code == ErrorCode.INVALID_PATCH
        assert "/id" in exc_info.value.error.details

    def test_nested_path_is_rejected(self):
        with pytest.raises(PatchOperationException):
            apply_patch(self._document(), [PatchOperation(op="add", path="/howTo/0", value="x")])

    def test_replace_without_value_is_rejected(self):
        with pytest.raises(PatchOperationException):
            apply_patch(self._document(), [PatchOperation(op="replace", path="/howTo")])

    def test_copy_without_from_is_rejected(self):
        with pytest.raises(PatchOperationException):
            apply_patch(self._document(), [PatchOperation(op="copy", path="/howTo")])

    def test_failed_test_operation_is_rejected(self):
        with pytest.raises(PatchOperationException):
            apply_patch(self._document(), [PatchOperation(op="test", path="/platform", value="svn")])

    def test_validate_update_reports_failing_fields(self):
        with pytest.raises(CommandValidationException) as exc_info:
            validate_update({"howTo": "", "platform": "x" * 101, "commandLine": None}, command_id=4)

        error = exc_info.value.error
        assert error.code == ErrorCode.VALIDATION_FAILED
        assert error.command_id == 4
        assert set(error.details) == {"howTo", "platform"}

    def test_validate_update_rejects_blank_values(self):
        with pytest.raises(CommandValidationException) as exc_info:
            validate_update({"howTo": "   ", "platform": "git", "commandLine": None})

        assert "howTo" in exc_info.value.error.details


class TestCommandHandler:
    def setup_method(self):
        self.repository = InMemoryCommandRepository([_migration_command()])
        self.handler = CommandHandler(self.repository)

    def test_list_returns_zero_items_when_store_is_empty(self):
        handler = CommandHandler(InMemoryCommandRepository())

        assert handler.list_commands() == []

    def test_list_returns_one_item_when_store_has_one_resource(self):
        commands = self.handler.list_commands()

        assert len(commands) == 1
        assert commands[0] == CommandReadDto(
            id=0,
            how_to="How to generate a migration",
            platform=".NET Core EF",
            command_line=None
        )

    def test_get_returns_command_for_existing_id(self):
        command = self.handler.get_command(0)

        assert command.how_to == "How to generate a migration"
        assert command.platform == ".NET Core EF"

    def test_get_raises_not_found_for_missing_id(self):
        with pytest.raises(CommandNotFoundException) as exc_info:
            self.handler.get_command(1)

        assert exc_info.value.error.code == ErrorCode.NOT_FOUND
        assert exc_info.value.error.command_id == 1

    def test_create_assigns_id_and_round_trips(self):
        dto = CommandCreateDto(
            how_to="Run a .NET Core App",
            platform=".NET Core CLI",
            command_line="dotnet run"
        )

        created = self.handler.create_command(dto)

        assert created.id == 1
        fetched = self.handler.get_command(created.id)
        assert fetched == created
        assert fetched.model_dump(exclude={"id"}) == dto.model_dump()

    def test_create_assigns_distinct_ids(self):
        first = self.handler.create_command(CommandCreateDto(how_to="a", platform="p"))
        second = self.handler.create_command(CommandCreateDto(how_to="b", platform="p"))

        assert first.id != second.id
        assert len(self.handler.list_commands()) == 3

    def test_update_replaces_mutable_fields_and_keeps_id(self):
        self.handler.update_command(0, CommandUpdateDto(
            how_to="Apply migrations",
            platform="EF Core CLI",
            command_line="dotnet ef database update"
        ))

        command = self.handler.get_command(0)
        assert command == CommandReadDto(
            id=0,
            how_to="Apply migrations",
            platform="EF Core CLI",
            command_line="dotnet ef database update"
        )

    def test_update_raises_not_found_and_does_not_mutate(self):
        with pytest.raises(CommandNotFoundException):
            self.handler.update_command(5, CommandUpdateDto(how_to="x", platform="y"))

        assert [c.id for c in self.handler.list_commands()] == [0]

    def test_empty_patch_leaves_command_unchanged(self):
        before = self.handler.get_command(0)

        self.handler.patch_command(0, [])

        assert self.handler.get_command(0) == before

    def test_patch_replace_how_to_changes_only_how_to(self):
        self.handler.patch_command(0, [
            PatchOperation(op="replace", path="/howTo", value="Run a .NET Core App")
        ])

        command = self.handler.get_command(0)
        assert command.how_to == "Run a .NET Core App"
        assert command.platform == ".NET Core EF"
        assert command.command_line is None

    def test_patch_that_fails_validation_leaves_command_unmodified(self):
        before = self.handler.get_command(0)

        with pytest.raises(CommandValidationException) as exc_info:
            self.handler.patch_command(0, [
                PatchOperation(op="replace", path="/commandLine", value="dotnet ef migrations add"),
                PatchOperation(op="replace", path="/howTo", value="x" * 251)
            ])

        assert "howTo" in exc_info.value.error.details
        assert self.handler.get_command(0) == before

    def test_patch_with_invalid_operation_leaves_command_unmodified(self):
        before = self.handler.get_command(0)

        with pytest.raises(PatchOperationException):
            self.handler.patch_command(0, [
                PatchOperation(op="replace", path="/platform", value="EF6"),
                PatchOperation(op="replace", path="/unknown", value="x")
            ])

        assert self.handler.get_command(0) == before

    def test_patch_raises_not_found_for_missing_id(self):
        with pytest.raises(CommandNotFoundException):
            self.handler.patch_command(1, [])

    def test_delete_then_get_raises_not_found(self):
        self.handler.delete_command(0)

        with pytest.raises(CommandNotFoundException):
            self.handler.get_command(0)
        assert self.handler.list_commands() == []

    def test_delete_raises_not_found_for_missing_id(self):
        with pytest.raises(CommandNotFoundException):
            self.handler.delete_command(1)

        assert len(self.handler.list_commands()) == 1


class TestInMemoryCommandRepository:
    def test_changes_are_invisible_until_commit(self):
        repository = InMemoryCommandRepository()
        command = Command(how_to="List files", platform="Linux")

        repository.create(command)

        assert repository.list_all() == []
        assert command.id is None

        repository.commit()

        assert command.id == 1
        assert repository.get_by_id(1) == command

    def test_returned_entities_are_copies(self):
        repository = InMemoryCommandRepository([_migration_command()])

        command = repository.get_by_id(0)
        command.how_to = "changed"

        assert repository.get_by_id(0).how_to == "How to generate a migration"

    def test_missing_id_returns_none(self):
        assert InMemoryCommandRepository().get_by_id(42) is None

    def test_commit_applies_only_its_own_staged_changes(self):
        store = InMemoryCommandRepository([_migration_command()])
        first = store.begin()
        first.create(Command(how_to="staged but never committed", platform="Linux"))

        CommandHandler(store.begin()).delete_command(0)

        assert store.list_all() == []

    def test_concurrent_creates_get_distinct_ids(self):
        store = InMemoryCommandRepository()

        def create(index: int) -> int:
            handler = CommandHandler(store.begin())
            return handler.create_command(CommandCreateDto(how_to=f"step {index}", platform="Linux")).id

        with ThreadPoolExecutor(max_workers=8) as executor:
            ids = list(executor.map(create, range(50)))

        assert len(set(ids)) == 50
        assert len(store.list_all()) == 50
