"""
Argument schemas for the editor and manager tools.

Each command is a tagged variant keyed on ``command``. Arguments coming from
the model are validated once here; the VirtualFileSystem never re-checks
their shape.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

EditToolSubCommands = ["view", "create", "str_replace", "insert"]
FileManagerSubCommands = ["rename", "delete"]


class _Command(BaseModel):
    model_config = ConfigDict(extra="ignore")

    path: str = Field(min_length=1)


class ViewCommand(_Command):
    command: Literal["view"]
    view_range: list[int] | None = None

    @field_validator("view_range")
    @classmethod
    def _two_integers(cls, value: list[int] | None) -> list[int] | None:
        if value is not None and len(value) != 2:
            raise ValueError("`view_range` should be a list of two integers.")
        return value


class CreateCommand(_Command):
    command: Literal["create"]
    file_text: str


class StrReplaceCommand(_Command):
    command: Literal["str_replace"]
    old_str: str = Field(min_length=1)
    new_str: str | None = None


class InsertCommand(_Command):
    command: Literal["insert"]
    insert_line: int
    new_str: str


class RenameCommand(_Command):
    command: Literal["rename"]
    new_path: str = Field(min_length=1)


class DeleteCommand(_Command):
    command: Literal["delete"]


EditorCommand = Annotated[
    Union[ViewCommand, CreateCommand, StrReplaceCommand, InsertCommand],
    Field(discriminator="command"),
]
ManagerCommand = Annotated[
    Union[RenameCommand, DeleteCommand],
    Field(discriminator="command"),
]

editor_command_adapter: TypeAdapter[EditorCommand] = TypeAdapter(EditorCommand)
manager_command_adapter: TypeAdapter[ManagerCommand] = TypeAdapter(ManagerCommand)
