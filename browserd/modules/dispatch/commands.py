"""
Typed tool commands.

Each tool has one pydantic model holding exactly its arguments. Raw
``(name, arguments)`` pairs are validated once by parse_command(); code
downstream only ever sees these models.
"""

from typing import Any, ClassVar, Dict, Optional, Type

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from browserd.errors import InvalidArgumentError, UnknownCommandError
from browserd.modules.api.models import Engine, ToolName


class Command(BaseModel):
    """Base for all tool commands."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    tool: ClassVar[ToolName]


class SessionCommand(Command):
    """A command that targets an existing browser session."""

    # browserId is the argument name older clients send
    handle: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("handle", "browserId")
    )


class LaunchBrowser(Command):
    tool: ClassVar[ToolName] = ToolName.LAUNCH_BROWSER

    # Not an Engine: an unknown engine is a launch failure, not an argument error.
    engine: str = Field(
        default=Engine.CHROMIUM.value, validation_alias=AliasChoices("engine", "browserType")
    )
    headless: bool = True
    engine_options: Optional[Dict[str, Any]] = Field(
        default=None,
        validation_alias=AliasChoices("engineOptions", "engine_options", "options"),
    )


class NavigateTo(SessionCommand):
    tool: ClassVar[ToolName] = ToolName.NAVIGATE_TO

    url: str = Field(..., min_length=1)


class ClickElement(SessionCommand):
    tool: ClassVar[ToolName] = ToolName.CLICK_ELEMENT

    selector: str = Field(..., min_length=1)


class TypeText(SessionCommand):
    tool: ClassVar[ToolName] = ToolName.TYPE_TEXT

    selector: str = Field(..., min_length=1)
    text: str


class GetText(SessionCommand):
    tool: ClassVar[ToolName] = ToolName.GET_TEXT

    selector: str = Field(..., min_length=1)


class Screenshot(SessionCommand):
    tool: ClassVar[ToolName] = ToolName.SCREENSHOT

    full_page: bool = Field(default=False, validation_alias=AliasChoices("fullPage", "full_page"))


class CloseBrowser(SessionCommand):
    tool: ClassVar[ToolName] = ToolName.CLOSE_BROWSER


COMMANDS: Dict[str, Type[Command]] = {
    cls.tool.value: cls
    for cls in (
        LaunchBrowser,
        NavigateTo,
        ClickElement,
        TypeText,
        GetText,
        Screenshot,
        CloseBrowser,
    )
}


def parse_command(name: Any, arguments: Any = None) -> Command:
    """
    Validate a tool invocation into its command model.

    Raises:
        UnknownCommandError: name is not a known tool
        InvalidArgumentError: required arguments missing or of the wrong type
    """
    model = COMMANDS.get(name) if isinstance(name, str) else None
    if model is None:
        raise UnknownCommandError(name)

    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        raise InvalidArgumentError(name, invalid=["arguments must be an object"])

    try:
        return model.model_validate(arguments)
    except ValidationError as e:
        missing, invalid = [], []
        for error in e.errors():
            field_name = ".".join(str(part) for part in error["loc"]) or "arguments"
            if error["type"] == "missing":
                missing.append(field_name)
            else:
                invalid.append(f"{field_name}: {error['msg']}")
        raise InvalidArgumentError(name, missing=missing, invalid=invalid) from None
