"""
Data models for shell results.

Pydantic models for what the tools hand back to the user:
- ElementInfo: A stored element handle and its current state
- Cookie: A WebDriver cookie (camelCase aliases as on the wire)
- WindowInfo: A top-level browsing context
- SessionInfo: A running driver
"""

from typing import Any, Iterable, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ElementInfo(BaseModel):
    """Snapshot of an element handle.

    Built from a live WebElement; reading it again needs a fresh snapshot.
    """

    id: str
    """Shell id of the handle (E1, E2, ...)."""

    tag_name: str = ""
    text: str = ""
    displayed: bool = False
    enabled: bool = False
    selected: bool = False
    location: dict[str, float] = Field(default_factory=dict)
    size: dict[str, float] = Field(default_factory=dict)
    attributes: dict[str, Optional[str]] = Field(default_factory=dict)

    @classmethod
    def from_element(
        cls,
        element_id: str,
        element: Any,
        attributes: Iterable[str] = (),
    ) -> "ElementInfo":
        """Read an element's state (one remote call per property)."""
        return cls(
            id=element_id,
            tag_name=element.tag_name,
            text=element.text,
            displayed=element.is_displayed(),
            enabled=element.is_enabled(),
            selected=element.is_selected(),
            location=dict(element.location),
            size=dict(element.size),
            attributes={name: element.get_attribute(name) for name in attributes},
        )


class Cookie(BaseModel):
    """A cookie as WebDriver sends and accepts it."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    value: str
    path: Optional[str] = None
    domain: Optional[str] = None
    secure: Optional[bool] = None
    http_only: Optional[bool] = Field(default=None, alias="httpOnly")
    expiry: Optional[int] = None
    same_site: Optional[Literal["Strict", "Lax", "None"]] = Field(default=None, alias="sameSite")

    def to_webdriver(self) -> dict[str, Any]:
        """Dict for WebDriver.add_cookie (unset fields omitted)."""
        return self.model_dump(by_alias=True, exclude_none=True)


class WindowInfo(BaseModel):
    """A window or tab handle."""

    handle: str
    index: int = Field(ge=0)
    current: bool = False


class SessionInfo(BaseModel):
    """A driver started from the shell."""

    name: str
    browser: str
    session_id: Optional[str] = None
    current: bool = False
    element_count: int = 0
